# Wordbox Services
from wordbox.services.auth import SessionManager, TokenConfig, User
from wordbox.services.deepl import DeepLClient, SourceLang, TargetLang
from wordbox.services.merriam_webster import DictionaryClient, ThesaurusClient
from wordbox.services.mymemory import Language, MyMemoryClient
from wordbox.services.sql_store import SqlAlchemyStore
from wordbox.services.store import CredentialStore, MemoryStore, StoreError
from wordbox.services.translator import Translator

__all__ = [
    "CredentialStore",
    "DeepLClient",
    "DictionaryClient",
    "Language",
    "MemoryStore",
    "MyMemoryClient",
    "SessionManager",
    "SourceLang",
    "SqlAlchemyStore",
    "StoreError",
    "TargetLang",
    "ThesaurusClient",
    "TokenConfig",
    "Translator",
    "User",
]
