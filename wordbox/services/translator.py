"""Translation aggregator.

Translates with DeepL, then enriches English results with Merriam-Webster
dictionary definitions and thesaurus synonyms.
"""

import logging

from wordbox.schemas.translate import (
    DeepLText,
    Definition,
    DictionaryTranslation,
    ThesaurusTranslation,
    Translation,
)
from wordbox.services.deepl import DeepLClient, SourceLang, TargetLang
from wordbox.services.http_client import UpstreamError
from wordbox.services.merriam_webster import DictionaryClient, ThesaurusClient


class Translator:
    def __init__(
        self,
        deepl: DeepLClient,
        dictionary: DictionaryClient,
        thesaurus: ThesaurusClient,
        *,
        logger: logging.Logger | None = None,
    ):
        self._deepl = deepl
        self._dictionary = dictionary
        self._thesaurus = thesaurus
        self._logger = logger or logging.getLogger(__name__)

    async def get(self, text: str, source: SourceLang, target: TargetLang) -> Translation:
        """Translate text; DeepL failures propagate, enrichment failures are skipped."""
        result = await self._deepl.translate(text, source, target)
        translation = Translation(deepl=[DeepLText(text=t) for t in result.texts()])
        for item in translation.deepl:
            self._logger.info("Got translation %r", item.text)

        # Merriam-Webster only covers English
        if not target.is_english:
            return translation

        texts = [item.text for item in translation.deepl]
        translation.dictionary = await self._definitions(texts)
        translation.thesaurus = await self._thesaurus_entries(texts)
        return translation

    async def _definitions(self, texts: list[str]) -> DictionaryTranslation:
        found = DictionaryTranslation()
        for text in texts:
            try:
                entries = await self._dictionary.lookup(text)
            except UpstreamError as e:
                self._logger.debug("Definition not found for %r: %s", text, e)
                continue

            for entry in entries:
                if entry.text != text:
                    self._logger.debug("Adding %r as synonym of %r", entry.text, text)
                    found.synonyms.append(entry.text)
                    continue
                found.defs.append(
                    Definition(
                        offensive=entry.offensive,
                        function=entry.function,
                        examples=entry.examples,
                        definition=entry.definition,
                        audio=entry.audio,
                    )
                )
        return found

    async def _thesaurus_entries(self, texts: list[str]) -> list[ThesaurusTranslation]:
        found = []
        for text in texts:
            try:
                entries = await self._thesaurus.lookup(text)
            except UpstreamError as e:
                self._logger.debug("Thesaurus not found for %r: %s", text, e)
                continue

            # Only the first matching entry per word
            entry = next((e for e in entries if e.text == text), None)
            if entry is None:
                continue
            found.append(
                ThesaurusTranslation(
                    text=entry.text,
                    synonyms=entry.synonyms[0] if entry.synonyms else [],
                    antonyms=entry.antonyms[0] if entry.antonyms else [],
                    offensive=entry.offensive,
                    function=entry.function,
                    definition=entry.definition,
                )
            )
        return found
