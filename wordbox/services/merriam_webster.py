"""Merriam-Webster Collegiate dictionary and thesaurus clients.

Both references return a JSON array of entries. When the headword is
unknown the array holds plain strings instead: spelling suggestions.
See https://www.dictionaryapi.com/products/json
"""

import logging
import string
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from wordbox.schemas.translate import Pronunciation
from wordbox.services.http_client import UpstreamError, WordNotFoundError, request_json

API_BASE = "https://www.dictionaryapi.com/api/v3/references"
AUDIO_URL = "https://media.merriam-webster.com/audio/prons/en/us/mp3/{dir}/{file}.mp3"


def audio_url(filename: str) -> str:
    """Build the pronunciation audio URL for a sound file name."""
    if filename.startswith("bix"):
        subdir = "bix"
    elif filename.startswith("gg"):
        subdir = "gg"
    elif filename[0].isdigit() or filename[0] in string.punctuation:
        subdir = "number"
    else:
        subdir = filename[0]
    return AUDIO_URL.format(dir=subdir, file=filename)


class _Sound(BaseModel):
    audio: str = ""


class _Pr(BaseModel):
    mw: str = ""
    sound: _Sound | None = None


class _Hwi(BaseModel):
    hw: str = ""
    prs: list[_Pr] = []


class _Example(BaseModel):
    t: str = ""


class _Suppl(BaseModel):
    examples: list[_Example] = []


class _DictMeta(BaseModel):
    id: str = ""
    uuid: str = ""
    offensive: bool = False


class DictionaryEntry(BaseModel):
    """One homograph from the Collegiate dictionary."""

    meta: _DictMeta = Field(default_factory=_DictMeta)
    hwi: _Hwi = Field(default_factory=_Hwi)
    fl: str = ""
    suppl: _Suppl = Field(default_factory=_Suppl)
    shortdef: list[str] = []

    @property
    def text(self) -> str:
        # Homographs are numbered after a colon, e.g. "set:1"
        return self.meta.id.split(":")[0]

    @property
    def definition(self) -> list[str]:
        return self.shortdef

    @property
    def examples(self) -> list[str]:
        return [e.t for e in self.suppl.examples]

    @property
    def function(self) -> str:
        return self.fl

    @property
    def offensive(self) -> bool:
        return self.meta.offensive

    @property
    def audio(self) -> list[Pronunciation]:
        prons = []
        for pr in self.hwi.prs:
            filename = pr.sound.audio if pr.sound else ""
            prons.append(
                Pronunciation(pron=pr.mw, audio_url=audio_url(filename) if filename else "")
            )
        return prons


class _ThesMeta(BaseModel):
    id: str = ""
    syns: list[list[str]] = []
    ants: list[list[str]] = []
    offensive: bool = False


class ThesaurusEntry(BaseModel):
    """One entry from the Collegiate thesaurus."""

    meta: _ThesMeta = Field(default_factory=_ThesMeta)
    fl: str = ""
    shortdef: list[str] = []

    @property
    def text(self) -> str:
        return self.meta.id

    @property
    def synonyms(self) -> list[list[str]]:
        return self.meta.syns

    @property
    def antonyms(self) -> list[list[str]]:
        return self.meta.ants

    @property
    def definition(self) -> list[str]:
        return self.shortdef

    @property
    def function(self) -> str:
        return self.fl

    @property
    def offensive(self) -> bool:
        return self.meta.offensive


class _Reference:
    """Lookup against one Merriam-Webster reference."""

    reference: str
    entry_model: type[BaseModel]

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        base_url: str = API_BASE,
        logger: logging.Logger | None = None,
    ):
        self._client = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._logger = logger or logging.getLogger(__name__)

    @property
    def service(self) -> str:
        return f"merriam-webster {self.reference}"

    def _url(self, text: str) -> str:
        return f"{self._base_url}/{self.reference}/json/{quote(text, safe='')}"

    async def _lookup(self, text: str) -> list[Any]:
        self._logger.info("Looking up %r in %s", text, self.service)
        data = await request_json(
            self._client, self.service, "GET", self._url(text), params={"key": self._api_key}
        )
        if not isinstance(data, list):
            raise UpstreamError(self.service, f"expected a JSON array, got {type(data).__name__}")

        entries = [item for item in data if isinstance(item, dict)]
        if not entries:
            suggestions = [item for item in data if isinstance(item, str)]
            self._logger.debug("No entry for %r, suggestions: %s", text, suggestions)
            raise WordNotFoundError(self.service, text, suggestions)

        try:
            return [self.entry_model.model_validate(item) for item in entries]
        except ValidationError as e:
            self._logger.error("Unexpected %s payload: %s", self.service, e)
            raise UpstreamError(self.service, f"unexpected payload: {e}") from e


class DictionaryClient(_Reference):
    reference = "collegiate"
    entry_model = DictionaryEntry

    async def lookup(self, text: str) -> list[DictionaryEntry]:
        """Return every dictionary entry for text, homographs included."""
        return await self._lookup(text)


class ThesaurusClient(_Reference):
    reference = "thesaurus"
    entry_model = ThesaurusEntry

    async def lookup(self, text: str) -> list[ThesaurusEntry]:
        """Return every thesaurus entry for text."""
        return await self._lookup(text)
