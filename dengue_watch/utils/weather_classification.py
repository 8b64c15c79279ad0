"""
Weather condition classification for a week of daily descriptions.

Two classifiers share the same vocabulary:

DOMINANT WEATHER CATEGORY (first match wins):
1. Any description mentioning rain, thunderstorm or storm
2. Any description mentioning drizzle or shower
3. Otherwise the most frequent description
4. "Unclassified" when the week has no descriptions at all

Severe-weather terms dominate even when they appear on a single day.

WET WEEK (any rule true):
1. Weekly precipitation total >= 50 mm
2. Any day mentions a high-priority term
3. At least 4 days mention drizzle or shower
"""

from collections import defaultdict
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

HIGH_PRIORITY_WEATHER_TERMS = ("rain", "thunderstorm", "storm")
SECONDARY_PRIORITY_WEATHER_TERMS = ("drizzle", "shower")

WET_WEEK_PRECIPITATION_THRESHOLD_MM = 50.0
WET_WEEK_DRIZZLE_DAY_THRESHOLD = 4

UNCLASSIFIED = "Unclassified"


class DominantWeather(NamedTuple):
    """Outcome of the dominant weather classification."""

    category: str
    description: Optional[str]
    matched_by_priority: bool


def _samples(descriptions: Optional[Iterable[Optional[str]]]) -> List[Tuple[str, str]]:
    """(original, normalized) pairs of the non-blank descriptions, in order."""
    if not descriptions:
        return []
    samples = []
    for description in descriptions:
        if description is None or not description.strip():
            continue
        original = description.strip()
        samples.append((original, original.lower()))
    return samples


def _find_priority_match(
    samples: Sequence[Tuple[str, str]],
    terms: Sequence[str]
) -> Optional[Tuple[str, str]]:
    for original, normalized in samples:
        for term in terms:
            if term in normalized:
                return (original, term)
    return None


def _most_common(samples: Sequence[Tuple[str, str]]) -> Optional[str]:
    if not samples:
        return None

    groups = defaultdict(list)
    for original, normalized in samples:
        groups[normalized].append(original)

    # Highest count first, then ordinal order of the normalized text
    _, originals = min(groups.items(), key=lambda item: (-len(item[1]), item[0]))
    return min(originals)


def most_common_description(descriptions: Iterable[Optional[str]]) -> Optional[str]:
    """
    Most frequent non-blank description, compared case-insensitively.

    The returned spelling is the ordinally smallest original spelling of the
    winning group (e.g. "Clear" wins over "clear").
    """
    return _most_common(_samples(descriptions))


def classify_dominant_weather(descriptions: Iterable[Optional[str]]) -> DominantWeather:
    """
    Classify the dominant weather category of a week.

    Args:
        descriptions: Daily weather descriptions (None and blanks are ignored)

    Returns:
        DominantWeather(category, description, matched_by_priority)

    Example:
        >>> classify_dominant_weather(["Clear sky", "Light rain", "Clear sky"])
        DominantWeather(category='Rain', description='Light rain', matched_by_priority=True)
    """
    samples = _samples(descriptions)
    if not samples:
        return DominantWeather(UNCLASSIFIED, None, False)

    for terms in (HIGH_PRIORITY_WEATHER_TERMS, SECONDARY_PRIORITY_WEATHER_TERMS):
        match = _find_priority_match(samples, terms)
        if match is not None:
            original, term = match
            return DominantWeather(term.title(), original, True)

    description = _most_common(samples)
    return DominantWeather(description.title(), description, False)


def is_wet_week(
    precipitation_values: Optional[Sequence[float]],
    descriptions: Iterable[Optional[str]]
) -> bool:
    """
    Decide whether a week counts as wet.

    A week without precipitation data is never wet, whatever the
    descriptions say.

    Example:
        >>> is_wet_week([10, 10, 10, 10, 10, 10, 10], [])
        True
    """
    if not precipitation_values:
        return False

    if sum(precipitation_values) >= WET_WEEK_PRECIPITATION_THRESHOLD_MM:
        return True

    normalized = [n for _, n in _samples(descriptions)]

    if any(term in d for d in normalized for term in HIGH_PRIORITY_WEATHER_TERMS):
        return True

    drizzle_days = sum(
        1 for d in normalized
        if any(term in d for term in SECONDARY_PRIORITY_WEATHER_TERMS)
    )
    return drizzle_days >= WET_WEEK_DRIZZLE_DAY_THRESHOLD
