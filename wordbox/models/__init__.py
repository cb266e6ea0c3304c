# Wordbox Models
from wordbox.models.token_blacklist import BlacklistedToken
from wordbox.models.user_credential import UserCredential

__all__ = [
    "BlacklistedToken",
    "UserCredential",
]
