"""
Unit Tests for the Pattern Catalog
"""

import pytest

from haven.domain.errors import InvalidConfiguration
from haven.services.breathing.catalog import DEFAULT_PATTERNS, PatternCatalog


@pytest.fixture
def catalog() -> PatternCatalog:
    return PatternCatalog()


class TestPatternCatalog:
    """Tests for catalog lookup."""

    def test_catalog_is_ordered(self, catalog):
        assert catalog.ids() == [pattern.id for pattern in DEFAULT_PATTERNS]
        assert len(catalog) == len(DEFAULT_PATTERNS)

    def test_all_patterns_have_positive_durations(self, catalog):
        for pattern in catalog:
            assert min(pattern.inhale, pattern.hold, pattern.exhale) >= 1

    def test_get_known_pattern(self, catalog):
        pattern = catalog.get("relax-478")

        assert (pattern.inhale, pattern.hold, pattern.exhale) == (4, 7, 8)

    def test_get_unknown_pattern_raises(self, catalog):
        with pytest.raises(InvalidConfiguration):
            catalog.get("does-not-exist")

    def test_calm_pattern_is_446(self, catalog):
        calm = catalog.calm()

        assert calm.label == "4-4-6"
        assert catalog.default() == calm

    def test_default_override(self):
        catalog = PatternCatalog(default_pattern_id="even")

        assert catalog.default().id == "even"
        assert "even" in catalog

    def test_unknown_default_rejected(self):
        with pytest.raises(InvalidConfiguration):
            PatternCatalog(default_pattern_id="missing")

    def test_duplicate_ids_rejected(self):
        with pytest.raises(InvalidConfiguration):
            PatternCatalog(patterns=(DEFAULT_PATTERNS[0], DEFAULT_PATTERNS[0]))

    def test_empty_catalog_rejected(self):
        with pytest.raises(InvalidConfiguration):
            PatternCatalog(patterns=())
