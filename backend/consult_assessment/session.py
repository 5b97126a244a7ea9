"""In-progress quiz state.

``QuizSession`` is the one object that owns a candidate's answers and position.
Every change goes through its methods: ``begin`` captures who is being
assessed, ``answer`` records a scored answer, ``advance``/``retreat`` walk the
flattened question sequence and ``reset`` throws everything away.
"""
from __future__ import annotations
import enum
from typing import Any, Dict, Optional, Tuple

from .catalog import Catalog, Criterion
from .errors import QuizStateError
from .gate import UserInfo, check_user_info
from .responses import Answer, ResponseSet, ScoreSummary, calculate_scores
from .scoring import ScoringPolicy, KeywordTierPolicy


class QuizState(str, enum.Enum):
	NOT_STARTED = "not_started"
	IN_PROGRESS = "in_progress"
	COMPLETED = "completed"


class QuizSession:
	def __init__(
		self,
		catalog: Catalog,
		policy: Optional[ScoringPolicy] = None,
		*,
		require_assessor: bool = False,
	) -> None:
		if catalog.total_questions == 0:
			raise QuizStateError("Catalog has no questions")
		self.catalog = catalog
		self.policy = policy or KeywordTierPolicy()
		self.require_assessor = require_assessor
		self._reset_fields()

	def _reset_fields(self) -> None:
		self.state = QuizState.NOT_STARTED
		self.user_info: Optional[UserInfo] = None
		self.section_index = 0
		self.criterion_index = 0
		self.responses = ResponseSet()
		self.summary: Optional[ScoreSummary] = None
		self.submission_id: Optional[int] = None

	@classmethod
	def for_variant(cls, variant) -> "QuizSession":
		return cls(variant.catalog, variant.policy, require_assessor=variant.require_assessor)

	# ---- lifecycle ----

	def begin(self, info: UserInfo) -> Dict[str, str]:
		"""Capture user info and move to the first question.

		Returns field problems; the session only starts when there are none.
		"""
		if self.state is not QuizState.NOT_STARTED:
			raise QuizStateError("Quiz already started")
		problems = check_user_info(info, require_assessor=self.require_assessor)
		if problems:
			return problems
		self.user_info = info.cleaned()
		self.section_index = 0
		self.criterion_index = 0
		self.state = QuizState.IN_PROGRESS
		return {}

	def reset(self) -> None:
		self._reset_fields()

	@property
	def is_completed(self) -> bool:
		return self.state is QuizState.COMPLETED

	# ---- answers ----

	def answer(self, section_index: int, criterion_index: int, selected_option: str) -> Answer:
		self._require_in_progress("answer")
		criterion = self.catalog.criterion(section_index, criterion_index)
		return self.responses.set_answer(section_index, criterion_index, selected_option, criterion, self.policy)

	def answer_current(self, selected_option: str) -> Answer:
		return self.answer(self.section_index, self.criterion_index, selected_option)

	def calculate_scores(self) -> ScoreSummary:
		return calculate_scores(self.catalog, self.responses)

	# ---- navigation ----

	@property
	def position(self) -> Tuple[int, int]:
		return self.section_index, self.criterion_index

	@property
	def current_criterion(self) -> Criterion:
		return self.catalog.criterion(self.section_index, self.criterion_index)

	def advance(self) -> QuizState:
		self._require_in_progress("advance")
		last_criterion = len(self.catalog.sections[self.section_index].criteria) - 1
		if self.criterion_index < last_criterion:
			self.criterion_index += 1
		elif self.section_index < len(self.catalog.sections) - 1:
			self.section_index += 1
			self.criterion_index = 0
		else:
			self.summary = self.calculate_scores()
			self.state = QuizState.COMPLETED
		return self.state

	def retreat(self) -> QuizState:
		self._require_in_progress("go back")
		if self.criterion_index > 0:
			self.criterion_index -= 1
		elif self.section_index > 0:
			self.section_index -= 1
			self.criterion_index = len(self.catalog.sections[self.section_index].criteria) - 1
		return self.state

	@property
	def total_questions(self) -> int:
		return self.catalog.total_questions

	@property
	def current_question_number(self) -> int:
		before = sum(len(s.criteria) for s in self.catalog.sections[: self.section_index])
		return before + self.criterion_index + 1

	@property
	def progress_percent(self) -> float:
		return 100 * self.current_question_number / self.total_questions

	# ---- submission ----

	def submission_payload(self) -> Dict[str, Any]:
		"""Request body for the submit endpoint, scored from the current answers."""
		if self.state is QuizState.NOT_STARTED or self.user_info is None:
			raise QuizStateError("Quiz has not been started")
		summary = self.summary if self.is_completed and self.summary else self.calculate_scores()
		info = self.user_info
		payload: Dict[str, Any] = {
			"name": info.name,
			"email": info.email,
			"responses": self.responses.to_dict(),
			"totalScore": summary.total_score,
			"sectionScores": [s.model_dump(by_alias=True) for s in summary.section_scores],
		}
		if info.accessors_name is not None:
			payload["accessorsName"] = info.accessors_name
		if info.accessors_email is not None:
			payload["accessorsEmail"] = info.accessors_email
		return payload

	def _require_in_progress(self, action: str) -> None:
		if self.state is QuizState.NOT_STARTED:
			raise QuizStateError(f"Cannot {action} before the quiz has started")
		if self.state is QuizState.COMPLETED:
			raise QuizStateError(f"Cannot {action} after the quiz is completed")
