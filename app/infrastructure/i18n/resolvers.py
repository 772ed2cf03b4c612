"""Locale negotiation for choosing the active locale.

Parses weighted locale preference strings (Accept-Language style) and
matches them against the locales an application has translations for.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import structlog

logger = structlog.get_logger(component="i18n.resolver")

_WHITESPACE = re.compile(r"\s")
_WEIGHT_MARKER = ";q="
_LANGUAGE_REGION = re.compile(r"^([a-zA-Z]{2,3})[-_]([a-zA-Z]{2,3})$")


@dataclass
class WeightedLocaleGroup:
    """Locale tags sharing one quality weight.

    A weight applies to its own tag and to the unweighted tags right before
    it, so ``de-de,de;q=0.9`` is a single group ``["de-de", "de"]`` at 0.9.

    Attributes:
        tags: Raw locale tags in input order.
        weight: Parsed quality weight, None when the group has none.
    """

    tags: List[str] = field(default_factory=list)
    weight: Optional[float] = None

    def sort_key(self) -> tuple:
        # Weighted groups first, then unweighted ones, then q<=0 groups.
        # A trailing unweighted group never outranks a q > 0 group.
        if self.weight is None:
            return (1, 0.0)
        if self.weight > 0:
            return (0, -self.weight)
        return (2, -self.weight)


class LanguageNegotiator:
    """Performs locale negotiation between client preferences and available locales.

    Preference strings look like browser Accept-Language headers:

        Opera:   de-DE,de;q=0.9,en;q=0.8
        Firefox: de-de,de;q=0.8,en-us;q=0.5,en;q=0.3
        IE6/7:   de

    Candidates are tried in preference order. Each candidate matches an
    available locale exactly, or through its two letter language code.
    """

    @staticmethod
    def format_locale(locale: str) -> str:
        """Normalize a ``language-region`` tag to ``language_REGION``.

        Args:
            locale: Raw locale tag (e.g., "de-de", "pt_br", "zh-Hant-TW").

        Returns:
            Normalized tag (e.g., "de_DE", "pt_BR"); other forms unchanged.
        """
        return _LANGUAGE_REGION.sub(
            lambda m: f"{m.group(1).lower()}_{m.group(2).upper()}", locale
        )

    @staticmethod
    def weighted_locales(preferences: Optional[str]) -> List[WeightedLocaleGroup]:
        """Split a preference string into weight groups.

        Example:
            >>> groups = LanguageNegotiator.weighted_locales("de-de,de;q=0.9,en;q=0.8")
            >>> [(g.tags, g.weight) for g in groups]
            [(['de-de', 'de'], 0.9), (['en'], 0.8)]

        Args:
            preferences: Comma separated preference string, may be None.

        Returns:
            Non-empty weight groups in input order.
        """
        cleaned = _WHITESPACE.sub("", preferences or "")
        groups = [WeightedLocaleGroup()]
        for part in cleaned.split(","):
            if not part:
                continue
            if _WEIGHT_MARKER in part:
                tag, _, raw_weight = part.partition(_WEIGHT_MARKER)
                current = groups[-1]
                if tag:
                    current.tags.append(tag)
                current.weight = _parse_weight(raw_weight)
                groups.append(WeightedLocaleGroup())
            else:
                groups[-1].tags.append(part)
        return [group for group in groups if group.tags]

    @staticmethod
    def formatted_sorted_locales(preferences: Optional[str]) -> List[str]:
        """Order and normalize the candidate locales of a preference string.

        Example:
            >>> LanguageNegotiator.formatted_sorted_locales("en;q=0.5,de-CH,de;q=0.9")
            ['de_CH', 'de', 'en']

        Args:
            preferences: Comma separated preference string, may be None.

        Returns:
            Normalized candidate tags, most preferred first.
        """
        groups = sorted(
            LanguageNegotiator.weighted_locales(preferences),
            key=WeightedLocaleGroup.sort_key,
        )
        return [
            LanguageNegotiator.format_locale(tag) for group in groups for tag in group.tags
        ]

    @staticmethod
    def best_locale_in(
        preferences: Optional[str],
        available_locales: Optional[Iterable[str]],
    ) -> Optional[str]:
        """Find the best available locale for a preference string.

        Args:
            preferences: Comma separated preference string, may be None.
            available_locales: Accepted locales. None accepts any candidate.

        Returns:
            The matching available locale (or its language code), or None
            if nothing matches.
        """
        available = (
            None
            if available_locales is None
            else [str(locale) for locale in available_locales]
        )

        for candidate in LanguageNegotiator.formatted_sorted_locales(preferences):
            if available is None:
                return candidate
            if candidate in available:
                return candidate
            language = candidate[:2]
            if language in available:
                return language

        logger.debug(
            "no_matching_locale",
            preferences=preferences,
            available_locales=available,
        )
        return None


def _parse_weight(raw_weight: str) -> Optional[float]:
    try:
        weight = float(raw_weight)
    except ValueError:
        return None
    if not math.isfinite(weight):
        return None
    return weight
