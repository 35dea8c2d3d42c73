"""
Breathing Pattern Catalog

Static, ordered, read-only list of the breathing patterns offered
to users. Loaded once at startup; there is no mutation API.
"""

from typing import Iterator, Optional

from haven.domain.errors import InvalidConfiguration
from haven.domain.models.pattern import BreathingPattern


CALM_PATTERN_ID = "calm"

DEFAULT_PATTERNS: tuple[BreathingPattern, ...] = (
    BreathingPattern(
        id=CALM_PATTERN_ID,
        name="Calm",
        description="In through the nose for 4, hold for 4, out for 6.",
        inhale=4,
        hold=4,
        exhale=6,
    ),
    BreathingPattern(
        id="even",
        name="Even Breathing",
        description="Equal counts in, hold and out. Easy to follow.",
        inhale=4,
        hold=4,
        exhale=4,
    ),
    BreathingPattern(
        id="relax-478",
        name="4-7-8 Relaxing Breath",
        description="A long hold and slow exhale to settle before sleep.",
        inhale=4,
        hold=7,
        exhale=8,
    ),
    BreathingPattern(
        id="energize",
        name="Gentle Energizer",
        description="Quick inhale, short pause, long relaxed exhale.",
        inhale=3,
        hold=1,
        exhale=6,
    ),
)


class PatternCatalog:
    """
    Ordered collection of breathing patterns.

    Usage:
        catalog = PatternCatalog()
        pattern = catalog.get("relax-478")
    """

    def __init__(
        self,
        patterns: tuple[BreathingPattern, ...] = DEFAULT_PATTERNS,
        default_pattern_id: Optional[str] = None,
    ) -> None:
        if not patterns:
            raise InvalidConfiguration("Pattern catalog cannot be empty")

        ids = [pattern.id for pattern in patterns]
        if len(set(ids)) != len(ids):
            raise InvalidConfiguration(f"Duplicate pattern ids in catalog: {ids}")

        self._patterns = tuple(patterns)
        self._by_id = {pattern.id: pattern for pattern in self._patterns}
        self._default_id = default_pattern_id or self._patterns[0].id

        if self._default_id not in self._by_id:
            raise InvalidConfiguration(f"Unknown default pattern: {self._default_id}")

    def all(self) -> tuple[BreathingPattern, ...]:
        """All patterns in display order."""
        return self._patterns

    def ids(self) -> list[str]:
        """Pattern ids in display order."""
        return [pattern.id for pattern in self._patterns]

    def get(self, pattern_id: str) -> BreathingPattern:
        """
        Look up a pattern by id.

        Raises:
            InvalidConfiguration: If the id is not in the catalog
        """
        try:
            return self._by_id[pattern_id]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown breathing pattern: {pattern_id}",
                command="select_pattern",
            ) from None

    def default(self) -> BreathingPattern:
        """Pattern selected when the engine is created."""
        return self._by_id[self._default_id]

    def calm(self) -> BreathingPattern:
        """Pattern used by the quick calm shortcut."""
        return self._by_id.get(CALM_PATTERN_ID, self.default())

    def __iter__(self) -> Iterator[BreathingPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._by_id
