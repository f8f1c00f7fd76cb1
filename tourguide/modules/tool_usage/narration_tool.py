"""
modules/tool_usage/narration_tool.py
--------------------------------------
Spoken-narration text for a sight.

Generated content is cached per (sight id, language, length, interests). The
cache holds at most max_entries texts; the least recently used one is evicted
first. Without a completion client, or when generation fails, the sight's
static description is returned instead.

Language, length, interests and the listener's name default to the user's
settings.
"""

from __future__ import annotations
import logging
from collections import OrderedDict
from typing import Optional

from tourguide import config
from tourguide.llm import CompletionClient, LLMError
from tourguide.schemas.settings import DetailLevel, Language, UserSettings
from tourguide.schemas.sight import Sight

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a knowledgeable, engaging tour guide."

_LENGTH_TEXT: dict[DetailLevel, str] = {
    DetailLevel.BRIEF:  "1-minute",
    DetailLevel.MEDIUM: "2-minute",
    DetailLevel.EXPERT: "5-minute",
}
_LANGUAGE_NAME: dict[Language, str] = {
    Language.EN: "English",
    Language.DE: "German",
}


class NarrationTool:
    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        settings: Optional[UserSettings] = None,
        max_entries: int = config.NARRATION_CACHE_SIZE,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1 (got {max_entries})")
        self.client      = client
        self.settings    = settings or UserSettings()
        self.max_entries = max_entries
        self._cache: OrderedDict[tuple[str, str, str, str], str] = OrderedDict()

    def __len__(self) -> int:
        return len(self._cache)

    def resolve(
        self,
        language: Optional[Language] = None,
        length: Optional[DetailLevel] = None,
        interests: Optional[str] = None,
    ) -> tuple[Language, DetailLevel, str]:
        """Fill unset parameters from the user's settings."""
        language = Language(language) if language is not None else self.settings.language
        length = DetailLevel(length) if length is not None else self.settings.audio_length
        if interests is None:
            interests = self.settings.special_interests
        return language, length, interests.strip() or "general"

    def cached(self, sight: Sight, language: Language, length: DetailLevel,
               interests: str) -> Optional[str]:
        return self._cache.get(self._key(sight, *self.resolve(language, length, interests)))

    def generate(
        self,
        sight: Sight,
        language: Optional[Language] = None,
        length: Optional[DetailLevel] = None,
        interests: Optional[str] = None,
    ) -> str:
        language, length, interests = self.resolve(language, length, interests)
        key = self._key(sight, language, length, interests)
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]

        if self.client is None:
            return sight.description(language, length)

        prompt = (
            f"Write a {_LENGTH_TEXT[length]} spoken tour narration in "
            f"{_LANGUAGE_NAME[language]} about {sight.name} ({sight.category}). "
            f"Tailor it to a listener interested in: {interests}."
        )
        user_name = self.settings.user_name.strip()
        if user_name:
            prompt += f" Address the listener as {user_name}."
        try:
            content = self.client.complete(prompt, system=SYSTEM_PROMPT)
        except LLMError as exc:
            logger.warning("Narration for %r failed, using static text: %s", sight.name, exc)
            return sight.description(language, length)

        self._cache[key] = content
        while len(self._cache) > self.max_entries:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("Narration cache full, evicted %s", evicted)
        return content

    def forget(self, sight: Sight) -> int:
        """Drop every cached narration for a sight; returns how many were removed."""
        keys = [k for k in self._cache if k[0] == str(sight.id)]
        for k in keys:
            del self._cache[k]
        return len(keys)

    @staticmethod
    def _key(sight: Sight, language: Language, length: DetailLevel,
             interests: str) -> tuple[str, str, str, str]:
        return (str(sight.id), language.value, length.value, interests)
