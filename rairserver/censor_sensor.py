"""Profanity detection and masking by word tiers."""

from __future__ import annotations

import enum
import json
import logging
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)


class ProfanityType(enum.IntEnum):
    """Tiers a dictionary word can belong to."""

    SLURS = 0
    COMMON_PROFANITY = 1
    SEXUAL_TERMS = 2
    POSSIBLY_OFFENSIVE = 3
    USER_ADDED = 4


class CensorSensor:
    """Checks and cleans phrases against a dictionary of tiered words."""

    def __init__(self, word_tiers: Mapping[str, int]) -> None:
        self._word_tiers: dict[str, int] = {}
        self._enabled_tiers: set[int] = set()
        for word, tier in word_tiers.items():
            if not isinstance(tier, int) or isinstance(tier, bool):
                raise ValueError(f"tier for {word!r} is not an integer")
            self._word_tiers[word.lower()] = tier
            self._enabled_tiers.add(tier)

    @classmethod
    def from_file(cls, path: str | Path) -> CensorSensor:
        """Load a JSON object mapping words to tiers."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("deserialize failed: %s", exc)
            raise ValueError("deserialize failed") from exc
        if not isinstance(data, dict):
            raise ValueError("deserialize failed")
        return cls(data)

    def _is_bad(self, word: str) -> bool:
        tier = self._word_tiers.get(word)
        return tier is not None and tier in self._enabled_tiers

    def is_profane(self, phrase: str) -> bool:
        """Return whether any space-separated word is an enabled profanity."""
        words = phrase.lower().split(" ")
        result = any(self._is_bad(word) for word in words)
        logger.debug("phrase %s profane: %s", phrase, result)
        return result

    def is_profane_ish(self, phrase: str) -> bool:
        """Return whether an enabled profanity occurs anywhere in the phrase."""
        lowered = phrase.lower()
        result = any(
            word in lowered and tier in self._enabled_tiers
            for word, tier in self._word_tiers.items()
        )
        logger.debug("phrase %s profane ish: %s", phrase, result)
        return result

    def clean_profanity(self, phrase: str) -> str:
        """Lower-case the phrase and mask every profane word with asterisks."""
        words = phrase.lower().split(" ")
        cleaned = " ".join("*" * len(w) if self._is_bad(w) else w for w in words)
        logger.debug("phrase %s", cleaned)
        return cleaned

    def clean_profanity_ish(self, phrase: str) -> str:
        """Lower-case the phrase and mask the first occurrence of each profanity."""
        result = phrase.lower()
        for word, tier in self._word_tiers.items():
            pos = result.find(word)
            if pos != -1 and tier in self._enabled_tiers:
                result = result[:pos] + "*" * len(word) + result[pos + len(word):]
        logger.debug("phrase %s", result)
        return result

    def enable_tier(self, tier: int) -> None:
        """Enable a tier; tiers outside the known range are ignored."""
        if 0 <= tier <= ProfanityType.USER_ADDED:
            self._enabled_tiers.add(int(tier))
            logger.debug("tier %s enabled", tier)

    def disable_tier(self, tier: int) -> None:
        """Disable a tier; tiers outside the known range are ignored."""
        if 0 <= tier <= ProfanityType.USER_ADDED:
            self._enabled_tiers.discard(int(tier))
            logger.debug("tier %s disabled", tier)