"""DeepL translation API client."""

import logging
from enum import StrEnum

import httpx
from pydantic import BaseModel, ValidationError

from wordbox.services.http_client import UpstreamError, request_json

SERVICE = "deepl"


class SourceLang(StrEnum):
    """Languages DeepL accepts as source."""

    BULGARIAN = "BG"
    CZECH = "CS"
    DANISH = "DA"
    GERMAN = "DE"
    GREEK = "EL"
    ENGLISH = "EN"
    SPANISH = "ES"
    ESTONIAN = "ET"
    FINNISH = "FI"
    FRENCH = "FR"
    HUNGARIAN = "HU"
    INDONESIAN = "ID"
    ITALIAN = "IT"
    JAPANESE = "JA"
    LITHUANIAN = "LT"
    LATVIAN = "LV"
    DUTCH = "NL"
    POLISH = "PL"
    PORTUGUESE = "PT"
    ROMANIAN = "RO"
    RUSSIAN = "RU"
    SLOVAK = "SK"
    SLOVENIAN = "SL"
    SWEDISH = "SV"
    TURKISH = "TR"
    CHINESE = "ZH"


class TargetLang(StrEnum):
    """Languages DeepL can translate into."""

    BULGARIAN = "BG"
    CZECH = "CS"
    DANISH = "DA"
    GERMAN = "DE"
    GREEK = "EL"
    ENGLISH_BRITISH = "EN-GB"
    ENGLISH_AMERICAN = "EN-US"
    SPANISH = "ES"
    ESTONIAN = "ET"
    FINNISH = "FI"
    FRENCH = "FR"
    HUNGARIAN = "HU"
    INDONESIAN = "ID"
    ITALIAN = "IT"
    JAPANESE = "JA"
    LITHUANIAN = "LT"
    LATVIAN = "LV"
    DUTCH = "NL"
    POLISH = "PL"
    PORTUGUESE = "PT-PT"
    BRAZILIAN = "PT-BR"
    ROMANIAN = "RO"
    RUSSIAN = "RU"
    SLOVAK = "SK"
    SLOVENIAN = "SL"
    SWEDISH = "SV"
    TURKISH = "TR"
    CHINESE = "ZH"

    @property
    def is_english(self) -> bool:
        return self in (TargetLang.ENGLISH_AMERICAN, TargetLang.ENGLISH_BRITISH)


class DeepLTranslation(BaseModel):
    detected_source_language: str = ""
    text: str = ""


class DeepLResult(BaseModel):
    """Decoded body of a /v2/translate response."""

    translations: list[DeepLTranslation] = []

    def texts(self) -> list[str]:
        return [t.text for t in self.translations]

    def source_langs(self) -> list[str]:
        return [t.detected_source_language for t in self.translations]


class DeepLClient:
    """Translate text with the DeepL REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        base_url: str = "https://api-free.deepl.com",
        logger: logging.Logger | None = None,
    ):
        self._client = http_client
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/v2/translate"
        self._logger = logger or logging.getLogger(__name__)

    async def translate(
        self, text: str, source_lang: SourceLang, target_lang: TargetLang
    ) -> DeepLResult:
        data = await request_json(
            self._client,
            SERVICE,
            "POST",
            self._url,
            data={
                "text": text,
                "source_lang": str(source_lang),
                "target_lang": str(target_lang),
            },
            headers={"Authorization": f"DeepL-Auth-Key {self._api_key}"},
        )
        self._logger.debug("Parsing DeepL response for %r", text)
        try:
            return DeepLResult.model_validate(data)
        except ValidationError as e:
            self._logger.error("Unexpected DeepL payload: %s", e)
            raise UpstreamError(SERVICE, f"unexpected payload: {e}") from e
