from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .catalog import Catalog, Criterion
from .scoring import ScoringPolicy, KeywordTierPolicy


class Answer(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	selected_option: str = Field(alias="selectedOption")
	points: int = Field(ge=0)


class SectionScore(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	section: str
	score: int
	total_points: int = Field(alias="totalPoints")


class ScoreSummary(BaseModel):
	total_score: int
	section_scores: List[SectionScore]


class ResponseSet:
	"""Answers keyed by section index, then criterion index.

	A section map, once created, stays even when nothing is left in it.
	"""

	def __init__(self, answers: Optional[Dict[int, Dict[int, Answer]]] = None) -> None:
		self._answers: Dict[int, Dict[int, Answer]] = {}
		for s_idx, section in (answers or {}).items():
			self._answers[int(s_idx)] = {int(c_idx): a for c_idx, a in section.items()}

	def set_answer(
		self,
		section_index: int,
		criterion_index: int,
		selected_option: str,
		criterion: Criterion,
		policy: Optional[ScoringPolicy] = None,
	) -> Answer:
		points = (policy or KeywordTierPolicy()).score(selected_option, criterion)
		answer = Answer(selected_option=selected_option, points=points)
		self._answers.setdefault(section_index, {})[criterion_index] = answer
		return answer

	def get(self, section_index: int, criterion_index: int) -> Optional[Answer]:
		return self._answers.get(section_index, {}).get(criterion_index)

	def section(self, section_index: int) -> Dict[int, Answer]:
		return dict(self._answers.get(section_index, {}))

	def items(self) -> List[Tuple[int, int, Answer]]:
		return [
			(s_idx, c_idx, answer)
			for s_idx in sorted(self._answers)
			for c_idx, answer in sorted(self._answers[s_idx].items())
		]

	def __len__(self) -> int:
		return sum(len(s) for s in self._answers.values())

	def __bool__(self) -> bool:
		return bool(self._answers)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, ResponseSet):
			return NotImplemented
		return self._answers == other._answers

	def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
		# JSON object keys are strings
		return {
			str(s_idx): {str(c_idx): a.model_dump(by_alias=True) for c_idx, a in section.items()}
			for s_idx, section in self._answers.items()
		}

	def to_json(self) -> str:
		return json.dumps(self.to_dict())

	@classmethod
	def from_dict(cls, data: Dict[Any, Dict[Any, Any]]) -> "ResponseSet":
		answers: Dict[int, Dict[int, Answer]] = {}
		for s_idx, section in (data or {}).items():
			bucket = answers.setdefault(int(s_idx), {})
			for c_idx, raw in (section or {}).items():
				bucket[int(c_idx)] = raw if isinstance(raw, Answer) else Answer.model_validate(raw)
		return cls(answers)

	@classmethod
	def from_json(cls, text: str) -> "ResponseSet":
		return cls.from_dict(json.loads(text or "{}"))


def calculate_scores(catalog: Catalog, responses: ResponseSet) -> ScoreSummary:
	"""Fold stored answer points into per-section and total scores.

	Only answers at positions the catalog defines count; missing answers add 0.
	"""
	section_scores: List[SectionScore] = []
	total = 0
	for s_idx, section in enumerate(catalog.sections):
		answered = responses.section(s_idx)
		section_score = sum(
			answered[c_idx].points
			for c_idx in range(len(section.criteria))
			if c_idx in answered
		)
		section_scores.append(SectionScore(section=section.name, score=section_score, total_points=section.total_points))
		total += section_score
	return ScoreSummary(total_score=total, section_scores=section_scores)


def section_scores_to_json(section_scores: List[SectionScore]) -> str:
	return json.dumps([s.model_dump(by_alias=True) for s in section_scores])


def section_scores_from_json(text: str) -> List[SectionScore]:
	return [SectionScore.model_validate(item) for item in json.loads(text or "[]")]
