#!/usr/bin/env python3
"""
Unit tests for cringe factors and synonym groups.
"""

import pytest

from budgetme.ledger.categories import (
    NEUTRAL_FACTOR,
    CategoryResolver,
    effective_multiplier,
    normalize,
    set_cringe,
    set_synonym,
    synonym_group,
)


@pytest.mark.unit
@pytest.mark.ledger
class TestSynonyms:
    """Test synonym linking and group lookup."""

    def test_link_is_symmetric_and_case_folded(self, fresh_ledger):
        set_synonym(fresh_ledger, "Coffee", "CAFE")

        assert fresh_ledger.synonyms == {"coffee": {"cafe"}, "cafe": {"coffee"}}

    def test_group_is_transitive(self, fresh_ledger):
        set_synonym(fresh_ledger, "coffee", "cafe")
        set_synonym(fresh_ledger, "cafe", "espresso")

        assert synonym_group(fresh_ledger, "ESPRESSO") == {"coffee", "cafe", "espresso"}

    def test_unlinked_keyword_is_its_own_group(self, fresh_ledger):
        assert synonym_group(fresh_ledger, " Rent ") == {"rent"}

    def test_self_synonym_is_rejected(self, fresh_ledger):
        with pytest.raises(ValueError, match="own synonym"):
            set_synonym(fresh_ledger, "coffee", "Coffee")
        assert fresh_ledger.synonyms == {}

    def test_normalize(self):
        assert normalize("  Groceries ") == "groceries"


@pytest.mark.unit
@pytest.mark.ledger
class TestCringeFactors:
    """Test factor storage and resolution."""

    def test_neutral_without_factor(self, fresh_ledger):
        assert effective_multiplier(fresh_ledger, "food") == NEUTRAL_FACTOR

    def test_direct_factor(self, fresh_ledger):
        stored = set_cringe(fresh_ledger, "Coffee", 1.5)

        assert stored == "coffee"
        assert effective_multiplier(fresh_ledger, "COFFEE") == 1.5

    def test_factor_applies_through_synonyms(self, fresh_ledger):
        set_synonym(fresh_ledger, "coffee", "cafe")
        set_cringe(fresh_ledger, "coffee", 2.0)

        assert effective_multiplier(fresh_ledger, "cafe") == 2.0

    def test_setting_via_synonym_consolidates(self, fresh_ledger):
        set_synonym(fresh_ledger, "coffee", "cafe")
        set_cringe(fresh_ledger, "coffee", 2.0)

        stored = set_cringe(fresh_ledger, "cafe", 3.0)

        assert stored == "coffee"
        assert fresh_ledger.cringe_factors == {"coffee": 3.0}

    def test_most_recent_factor_wins_after_joining_groups(self, fresh_ledger):
        set_cringe(fresh_ledger, "coffee", 2.0)
        set_cringe(fresh_ledger, "tea", 0.5)
        set_synonym(fresh_ledger, "coffee", "tea")

        assert effective_multiplier(fresh_ledger, "coffee") == 0.5
        assert effective_multiplier(fresh_ledger, "tea") == 0.5

    def test_consolidation_drops_stale_group_factors(self, fresh_ledger):
        set_cringe(fresh_ledger, "coffee", 2.0)
        set_cringe(fresh_ledger, "tea", 0.5)
        set_synonym(fresh_ledger, "coffee", "tea")

        set_cringe(fresh_ledger, "coffee", 4.0)

        assert fresh_ledger.cringe_factors == {"tea": 4.0}
        assert effective_multiplier(fresh_ledger, "coffee") == 4.0

    def test_unrelated_factors_are_kept(self, fresh_ledger):
        set_cringe(fresh_ledger, "rent", 0.1)
        set_cringe(fresh_ledger, "coffee", 2.0)

        assert fresh_ledger.cringe_factors == {"rent": 0.1, "coffee": 2.0}

    @pytest.mark.parametrize("factor", [0, -1.5, float("nan"), float("inf")])
    def test_invalid_factor_is_rejected(self, fresh_ledger, factor):
        with pytest.raises(ValueError, match="positive number"):
            set_cringe(fresh_ledger, "coffee", factor)
        assert fresh_ledger.cringe_factors == {}


@pytest.mark.unit
@pytest.mark.ledger
def test_category_resolver(fresh_ledger):
    """CategoryResolver reads the live ledger."""
    resolver = CategoryResolver(fresh_ledger)
    assert resolver.multiplier("coffee") == 1.0

    set_synonym(fresh_ledger, "coffee", "cafe")
    set_cringe(fresh_ledger, "cafe", 1.25)

    assert resolver.multiplier("coffee") == 1.25
    assert resolver.group("coffee") == {"coffee", "cafe"}
