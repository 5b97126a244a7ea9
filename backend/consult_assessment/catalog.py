from __future__ import annotations
import logging
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import CatalogError

logger = logging.getLogger(__name__)

InputType = Literal["binary", "multiple", "shortText", "longText"]
CHOICE_KINDS = ("binary", "multiple")


class Criterion(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	description: str
	points: int = Field(ge=0)
	input_type: InputType = Field(alias="inputType")
	options: Optional[Tuple[str, ...]] = None
	placeholder: Optional[str] = None

	@model_validator(mode="after")
	def _options_match_kind(self) -> "Criterion":
		if self.input_type in CHOICE_KINDS and not self.options:
			raise ValueError(f"{self.input_type} criterion '{self.description}' needs options")
		if self.input_type not in CHOICE_KINDS and self.options:
			raise ValueError(f"{self.input_type} criterion '{self.description}' cannot have options")
		return self


class Section(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	name: str = Field(alias="section")
	total_points: int = Field(alias="totalPoints", ge=0)
	criteria: Tuple[Criterion, ...]

	@property
	def criteria_points(self) -> int:
		return sum(c.points for c in self.criteria)


class Catalog(BaseModel):
	"""Ordered sections of scorable criteria.

	``total_points`` on each section is authored by hand. ``total_mismatches``
	reports sections where it disagrees with the criteria; ``load_catalog``
	logs those, or rejects the catalog when strict.
	"""

	model_config = ConfigDict(frozen=True)

	key: str
	title: str
	sections: Tuple[Section, ...]

	def __len__(self) -> int:
		return len(self.sections)

	@property
	def total_questions(self) -> int:
		return sum(len(s.criteria) for s in self.sections)

	@property
	def total_possible(self) -> int:
		return sum(s.total_points for s in self.sections)

	def criterion(self, section_index: int, criterion_index: int) -> Criterion:
		if not 0 <= section_index < len(self.sections):
			raise CatalogError(f"No section at index {section_index}")
		criteria = self.sections[section_index].criteria
		if not 0 <= criterion_index < len(criteria):
			raise CatalogError(f"No criterion at index {criterion_index} in section {section_index}")
		return criteria[criterion_index]

	def flatten(self) -> Iterator[Tuple[int, int, Criterion]]:
		for s_idx, section in enumerate(self.sections):
			for c_idx, criterion in enumerate(section.criteria):
				yield s_idx, c_idx, criterion

	def total_mismatches(self) -> List[Tuple[str, int, int]]:
		# (section name, stated total, sum of criteria points)
		return [
			(s.name, s.total_points, s.criteria_points)
			for s in self.sections
			if s.total_points != s.criteria_points
		]

	def to_public(self) -> Dict[str, Any]:
		return {
			"key": self.key,
			"title": self.title,
			"totalQuestions": self.total_questions,
			"totalPossible": self.total_possible,
			"sections": [s.model_dump(by_alias=True, exclude_none=True) for s in self.sections],
		}


def load_catalog(key: str, title: str, sections: List[Dict[str, Any]], *, strict: bool = False) -> Catalog:
	try:
		catalog = Catalog(key=key, title=title, sections=sections)
	except ValueError as e:
		raise CatalogError(f"Catalog '{key}' is malformed", details=str(e))
	for name, stated, actual in catalog.total_mismatches():
		if strict:
			raise CatalogError(
				f"Section '{name}' states {stated} points but its criteria sum to {actual}"
			)
		logger.warning("Catalog %s: section %r states %d points, criteria sum to %d", key, name, stated, actual)
	return catalog
