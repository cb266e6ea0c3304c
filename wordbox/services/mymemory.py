"""MyMemory translation memory client (English <-> Polish)."""

import logging
from dataclasses import dataclass
from enum import StrEnum

import httpx
from pydantic import BaseModel, Field, ValidationError

from wordbox.services.http_client import UpstreamError, request_json

SERVICE = "mymemory"
MYMEMORY_URL = "https://api.mymemory.translated.net/get"


class Language(StrEnum):
    """Language of the text being looked up."""

    POLISH = "pl"
    ENGLISH = "en"

    @property
    def lang_pair(self) -> str:
        return "en|pl" if self is Language.ENGLISH else "pl|en"


@dataclass(frozen=True)
class Alternative:
    text: str
    translation: str


class _ResponseData(BaseModel):
    translated_text: str = Field(default="", alias="translatedText")


class _Match(BaseModel):
    segment: str = ""
    translation: str = ""


class MemoryResult(BaseModel):
    """Decoded body of a MyMemory /get response."""

    response_data: _ResponseData = Field(default_factory=_ResponseData, alias="responseData")
    matches: list[_Match] = []

    @property
    def translated(self) -> str:
        return self.response_data.translated_text

    def alternatives(self) -> list[Alternative]:
        return [Alternative(text=m.segment, translation=m.translation) for m in self.matches]


class MyMemoryClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        url: str = MYMEMORY_URL,
        logger: logging.Logger | None = None,
    ):
        self._client = http_client
        self._url = url
        self._logger = logger or logging.getLogger(__name__)

    async def translate(self, text: str, lang: Language) -> MemoryResult:
        data = await request_json(
            self._client,
            SERVICE,
            "GET",
            self._url,
            params={"q": text, "langpair": lang.lang_pair},
        )
        try:
            return MemoryResult.model_validate(data)
        except ValidationError as e:
            self._logger.error("Unexpected MyMemory payload: %s", e)
            raise UpstreamError(SERVICE, f"unexpected payload: {e}") from e
