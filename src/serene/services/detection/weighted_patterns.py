"""
Weighted Pattern Primitives

Building blocks for the pattern library: weighted regex patterns,
multiplier modifiers, life-stressor bonuses, trigger definitions
and compound co-occurrence rules, plus the single generic
"sum matched weights" routine every scoring pass uses.

Matchers are case-insensitive and run against normalized
(lower-cased) text.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from serene.domain.models.trigger_analysis import CompoundPattern


_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "´": "'"})
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize text for pattern matching.

    Collapses whitespace, folds typographic apostrophes to ASCII
    and lower-cases the result.

    Args:
        text: Raw message text

    Returns:
        Normalized text
    """
    text = text.translate(_APOSTROPHES)
    text = _WHITESPACE.sub(" ", text.strip())
    return text.lower()


@dataclass(frozen=True)
class WeightedPattern:
    """
    A weighted matcher.

    Attributes:
        matcher: Compiled case-insensitive regex
        weight: Contribution when matched
        label: Short name recorded when matched
    """

    matcher: re.Pattern
    weight: float
    label: str

    def matches(self, text: str) -> bool:
        return self.matcher.search(text) is not None


@dataclass(frozen=True)
class Modifier:
    """A pattern that scales the accumulated score when matched."""

    matcher: re.Pattern
    multiplier: float


@dataclass(frozen=True)
class TriggerDefinition:
    """
    Static definition of a detectable trigger.

    Attributes:
        key: Trigger key (e.g. "work_dissatisfaction")
        patterns: Weighted patterns that evidence the trigger
        category: Grouping category (work, identity, social, ...)
        description: Human-readable description
    """

    key: str
    patterns: tuple[WeightedPattern, ...]
    category: str
    description: str


@dataclass(frozen=True)
class CompoundRule:
    """
    Named co-occurrence rule over qualifying trigger keys.

    Attributes:
        name: Compound pattern name
        description: Human-readable description
        requires_all: Keys that must all be present
        requires_any: Keys of which at least one must be present (empty = no constraint)
        involved: Keys reported as forming the pattern (None = every detected key)
    """

    name: str
    description: str
    requires_all: frozenset[str]
    requires_any: frozenset[str] = frozenset()
    involved: Optional[frozenset[str]] = None

    def evaluate(self, ranked_keys: Sequence[str]) -> Optional[CompoundPattern]:
        """
        Check the rule against ranked trigger keys.

        Args:
            ranked_keys: Qualifying trigger keys in rank order

        Returns:
            CompoundPattern when the rule fires, else None
        """
        present = set(ranked_keys)
        if not self.requires_all <= present:
            return None
        if self.requires_any and not (self.requires_any & present):
            return None

        if self.involved is None:
            triggers = tuple(ranked_keys)
        else:
            triggers = tuple(k for k in ranked_keys if k in self.involved)

        return CompoundPattern(
            name=self.name,
            description=self.description,
            triggers=triggers,
        )


def pattern(regex: str, weight: float, label: str = "") -> WeightedPattern:
    """Compile a case-insensitive weighted pattern."""
    return WeightedPattern(re.compile(regex, re.IGNORECASE), weight, label)


def modifier(regex: str, multiplier: float) -> Modifier:
    """Compile a case-insensitive multiplier modifier."""
    return Modifier(re.compile(regex, re.IGNORECASE), multiplier)


def sum_matched_weights(
    text: str,
    patterns: Iterable[WeightedPattern],
) -> tuple[float, list[str]]:
    """
    Sum the weights of every pattern matching the text.

    Each matching pattern contributes its weight once,
    regardless of how many times it occurs.

    Args:
        text: Normalized text
        patterns: Patterns to test

    Returns:
        (total weight, labels of the matching patterns in order)
    """
    total = 0.0
    labels: list[str] = []
    for weighted in patterns:
        if weighted.matches(text):
            total += weighted.weight
            labels.append(weighted.label)
    return total, labels


def max_multiplier(text: str, modifiers: Iterable[Modifier]) -> float:
    """
    Largest multiplier among matching modifiers.

    Args:
        text: Normalized text
        modifiers: Modifiers to test

    Returns:
        Maximum matching multiplier, 1.0 when none match
    """
    matched = [m.multiplier for m in modifiers if m.matcher.search(text)]
    return max(matched) if matched else 1.0


def first_match(text: str, patterns: Iterable[WeightedPattern]) -> Optional[WeightedPattern]:
    """First pattern in table order that matches the text."""
    for weighted in patterns:
        if weighted.matches(text):
            return weighted
    return None
