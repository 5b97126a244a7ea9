"""Points awarded for a single answer.

Two policies exist because the catalog variants grade ``multiple`` criteria
differently. Both share the keyword tiers below, the binary positive labels
and the free-text presence check; they only differ in how an option that
matches no keyword is graded.
"""
from __future__ import annotations
import abc
import math
from typing import Dict, Optional

from .catalog import Criterion

POSITIVE_LABELS = frozenset({
	"yes",
	"provided",
	"discussed",
	"completed",
	"arranged",
	"done",
	"true",
})

# Exact option text -> fraction of the criterion's points
FULL_TIER = (
	"Excellent",
	"Comprehensive",
	"Detailed explanation",
	"Actively encouraged",
	"Complete and accurate",
	"Arranged when needed",
	"Discussed thoroughly",
	"Used multiple sources",
)
GOOD_TIER = (
	"Good",
	"Adequate",
	"Basic advice",
	"Responded well",
	"Mostly complete",
	"Used one source",
)
FAIR_TIER = (
	"Fair",
	"Basic",
	"Brief mention",
	"Minimal encouragement",
	"Basic documentation",
	"Mentioned briefly",
	"Discussed briefly",
)
POOR_TIER = (
	"Poor",
	"Inadequate",
	"Not discussed",
	"Discouraged questions",
	"Relied on memory",
	"No consultation",
)
NOT_APPLICABLE_TIER = (
	"Not applicable",
	"Not needed",
	"Should have arranged",
	"Unclear",
)

KEYWORD_FRACTIONS: Dict[str, float] = {}
for _tier, _fraction in (
	(FULL_TIER, 1.0),
	(GOOD_TIER, 0.75),
	(FAIR_TIER, 0.5),
	(POOR_TIER, 0.0),
	(NOT_APPLICABLE_TIER, 1.0),
):
	for _label in _tier:
		KEYWORD_FRACTIONS[_label] = _fraction

FALLBACK_FRACTION = 0.25
POSITIONAL_FLOOR = 0.1
DEFAULT_MIN_TEXT_LENGTH = 3


def round_half_up(value: float) -> int:
	# round first so 0.7 * 5 lands on 3.5, not 3.4999999999999996
	return int(math.floor(round(value, 9) + 0.5))


def portion(points: int, fraction: float) -> int:
	return max(0, min(points, round_half_up(points * fraction)))


class ScoringPolicy(abc.ABC):
	name = "base"

	def __init__(self, min_text_length: int = DEFAULT_MIN_TEXT_LENGTH) -> None:
		self.min_text_length = min_text_length

	def score(self, selected_option: Optional[str], criterion: Criterion) -> int:
		if not selected_option or not selected_option.strip():
			return 0
		kind = criterion.input_type
		if kind == "binary":
			return criterion.points if selected_option.strip().lower() in POSITIVE_LABELS else 0
		if kind == "multiple":
			return portion(criterion.points, self.multiple_fraction(selected_option, criterion))
		if kind in ("shortText", "longText"):
			return criterion.points if len(selected_option.strip()) >= self.min_text_length else 0
		return 0

	@abc.abstractmethod
	def multiple_fraction(self, selected_option: str, criterion: Criterion) -> float:
		...

	def __repr__(self) -> str:
		return f"{type(self).__name__}(min_text_length={self.min_text_length})"


class KeywordTierPolicy(ScoringPolicy):
	"""Grades ``multiple`` answers purely on which quality tier their text falls in."""

	name = "keyword"

	def multiple_fraction(self, selected_option: str, criterion: Criterion) -> float:
		return KEYWORD_FRACTIONS.get(selected_option, FALLBACK_FRACTION)


class PositionalDecayPolicy(ScoringPolicy):
	"""Grades ``multiple`` answers by their position in the option list.

	The first option earns full points and each later one earns linearly less,
	down to ``POSITIONAL_FLOOR`` for the last. A keyword tier match wins over
	the position; text that is neither a keyword nor an option gets the
	fallback fraction.
	"""

	name = "positional"

	def multiple_fraction(self, selected_option: str, criterion: Criterion) -> float:
		if selected_option in KEYWORD_FRACTIONS:
			return KEYWORD_FRACTIONS[selected_option]
		options = criterion.options or ()
		if selected_option not in options:
			return FALLBACK_FRACTION
		if len(options) == 1:
			return 1.0
		position = options.index(selected_option)
		return max(POSITIONAL_FLOOR, 1.0 - (1.0 - POSITIONAL_FLOOR) * position / (len(options) - 1))


POLICIES = {
	KeywordTierPolicy.name: KeywordTierPolicy,
	PositionalDecayPolicy.name: PositionalDecayPolicy,
}


def get_policy(name: str, **kwargs) -> ScoringPolicy:
	try:
		return POLICIES[name](**kwargs)
	except KeyError:
		raise ValueError(f"Unknown scoring policy '{name}'")


def score(selected_option: Optional[str], criterion: Criterion, policy: Optional[ScoringPolicy] = None) -> int:
	return (policy or KeywordTierPolicy()).score(selected_option, criterion)
