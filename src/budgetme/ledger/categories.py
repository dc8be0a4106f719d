#!/usr/bin/env python3
"""
Category Cost Scaling

Spend categories can carry a "cringe factor", a multiplier applied to every
spend in that category. Keywords linked as synonyms form a group that shares
one factor.

Resolution is deterministic: when several members of a group carry a factor
(possible after two groups are joined), the most recently set one wins.
``cringe_factors`` keeps insertion order, and setting a factor always moves
its key to the end.
"""

import logging
import math

from .models import Ledger

logger = logging.getLogger(__name__)

NEUTRAL_FACTOR = 1.0


def normalize(keyword: str) -> str:
    """Case-fold a category keyword for storage and lookup."""
    return keyword.strip().casefold()


def synonym_group(ledger: Ledger, keyword: str) -> set[str]:
    """
    Get the keyword together with every keyword linked to it.

    Links are followed transitively, so ``coffee~cafe`` and ``cafe~espresso``
    put all three in one group.

    Args:
        ledger: Ledger holding the synonym graph
        keyword: Category keyword (any case)

    Returns:
        Set of case-folded keywords, always including ``keyword`` itself
    """
    start = normalize(keyword)
    group = {start}
    pending = [start]
    while pending:
        current = pending.pop()
        for neighbor in ledger.synonyms.get(current, ()):
            if neighbor not in group:
                group.add(neighbor)
                pending.append(neighbor)
    return group


def _winning_keyword(ledger: Ledger, group: set[str]) -> str | None:
    """Most recently set keyword in ``group`` that carries a factor."""
    for key in reversed(list(ledger.cringe_factors)):
        if key in group:
            return key
    return None


def effective_multiplier(ledger: Ledger, category: str) -> float:
    """
    Resolve the multiplier applied to spends in ``category``.

    Returns:
        The factor stored for any member of the category's synonym group,
        or 1.0 when none is defined
    """
    key = _winning_keyword(ledger, synonym_group(ledger, category))
    if key is None:
        return NEUTRAL_FACTOR
    return ledger.cringe_factors[key]


def set_cringe(ledger: Ledger, keyword: str, factor: float) -> str:
    """
    Set the cringe factor for a keyword's synonym group.

    If some member of the group already carries a factor, the group is
    consolidated onto that member: every other stored factor in the group is
    dropped. Otherwise the factor is stored under the keyword itself.

    Args:
        ledger: Ledger to mutate
        keyword: Category keyword (any case)
        factor: Positive multiplier

    Returns:
        The keyword the factor was stored under

    Raises:
        ValueError: If the factor is not a positive finite number
    """
    factor = float(factor)
    if not math.isfinite(factor) or factor <= 0:
        raise ValueError(f"Cringe factor must be a positive number, got {factor}")

    group = synonym_group(ledger, keyword)
    target = _winning_keyword(ledger, group) or normalize(keyword)

    for member in group:
        ledger.cringe_factors.pop(member, None)
    ledger.cringe_factors[target] = factor

    logger.debug(f"Cringe factor for {sorted(group)} set to {factor} (stored under '{target}')")
    return target


def set_synonym(ledger: Ledger, first: str, second: str) -> None:
    """
    Link two keywords so they share a cringe factor.

    Raises:
        ValueError: If both keywords are the same after case-folding
    """
    a = normalize(first)
    b = normalize(second)
    if a == b:
        raise ValueError(f"A keyword cannot be its own synonym: '{a}'")

    ledger.synonyms.setdefault(a, set()).add(b)
    ledger.synonyms.setdefault(b, set()).add(a)


class CategoryResolver:
    """Resolves spend categories of one ledger to effective multipliers."""

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def multiplier(self, category: str) -> float:
        return effective_multiplier(self.ledger, category)

    def group(self, category: str) -> set[str]:
        return synonym_group(self.ledger, category)
