# Wordbox Schemas
from wordbox.schemas.auth import (
    CredentialsRequest,
    MessageResponse,
    TokenResponse,
    UserResponse,
)
from wordbox.schemas.translate import (
    DictionaryTranslation,
    MemoryResponse,
    ThesaurusTranslation,
    Translation,
)

__all__ = [
    "CredentialsRequest",
    "DictionaryTranslation",
    "MemoryResponse",
    "MessageResponse",
    "ThesaurusTranslation",
    "TokenResponse",
    "Translation",
    "UserResponse",
]
