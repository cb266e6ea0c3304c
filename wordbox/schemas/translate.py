"""Pydantic schemas for the translate API."""

from pydantic import BaseModel, Field


class Pronunciation(BaseModel):
    """Written pronunciation and, when available, its audio URL."""

    pron: str = ""
    audio_url: str = ""


class DeepLText(BaseModel):
    text: str


class Definition(BaseModel):
    """A dictionary definition of a translated word."""

    offensive: bool = False
    function: str = Field(default="", description="Part of speech, e.g. noun or verb")
    examples: list[str] = []
    definition: list[str] = []
    audio: list[Pronunciation] = []


class DictionaryTranslation(BaseModel):
    defs: list[Definition] = []
    synonyms: list[str] = Field(
        default=[], description="Related headwords returned by the dictionary lookup"
    )


class ThesaurusTranslation(BaseModel):
    text: str
    synonyms: list[str] = []
    antonyms: list[str] = []
    offensive: bool = False
    function: str = ""
    definition: list[str] = []


class Translation(BaseModel):
    """Everything known about one piece of text.

    dictionary and thesaurus are only filled for English targets.
    """

    deepl: list[DeepLText] = []
    dictionary: DictionaryTranslation | None = None
    thesaurus: list[ThesaurusTranslation] | None = None


class MemoryAlternative(BaseModel):
    text: str
    translation: str


class MemoryResponse(BaseModel):
    """MyMemory lookup result."""

    translated: str
    alternatives: list[MemoryAlternative] = []
