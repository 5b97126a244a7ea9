from __future__ import annotations
import json
import math
from numbers import Number
from typing import Any, Dict, List

from .catalog import Catalog
from .errors import SubmissionInvalid
from .gate import EMAIL_NOT_PROVIDED, is_valid_email
from .responses import ResponseSet, section_scores_from_json
from .storage import NewSubmission, SubmissionRecord, utcnow

# SQLite and libSQL INTEGER columns are signed 64-bit
MAX_TOTAL_SCORE = 2**63 - 1


def _is_number(value: Any) -> bool:
	return isinstance(value, Number) and not isinstance(value, bool)


def _is_storable_score(value: Any) -> bool:
	if not _is_number(value) or value < 0 or value > MAX_TOTAL_SCORE:
		return False
	# NaN fails every comparison above
	if isinstance(value, float) and not math.isfinite(value):
		return False
	return int(value) == value


def validate_submission(body: Any, *, require_assessor: bool) -> NewSubmission:
	"""Check a submit request body and turn it into a storable submission.

	Raises ``SubmissionInvalid`` with the message shown to the client.
	"""
	if not isinstance(body, dict):
		raise SubmissionInvalid("Invalid request body")

	name = body.get("name")
	email = body.get("email")
	accessors_name = body.get("accessorsName")
	accessors_email = body.get("accessorsEmail")
	responses = body.get("responses")
	total_score = body.get("totalScore")
	section_scores = body.get("sectionScores")

	required = [name]
	if require_assessor:
		required += [accessors_name, accessors_email]
	if any(not value for value in required) or None in (responses, total_score, section_scores):
		raise SubmissionInvalid("Missing required fields")

	if (
		not isinstance(name, str)
		or (email and not isinstance(email, str))
		or (accessors_name is not None and not isinstance(accessors_name, str))
		or (accessors_email is not None and not isinstance(accessors_email, str))
		or not isinstance(responses, dict)
		or not isinstance(section_scores, list)
	):
		raise SubmissionInvalid("Invalid data types")

	if not name.strip() or (require_assessor and not accessors_name.strip()):
		raise SubmissionInvalid("Missing required fields")

	if accessors_email is not None and (require_assessor or accessors_email.strip()):
		if not is_valid_email(accessors_email.strip()):
			raise SubmissionInvalid("Invalid assessor email format")

	if not _is_storable_score(total_score):
		raise SubmissionInvalid("Invalid total score")

	try:
		responses_json = ResponseSet.from_dict(responses).to_json()
		section_scores_json = json.dumps(section_scores)
	except (AttributeError, TypeError, ValueError) as e:
		raise SubmissionInvalid("Invalid responses", details=str(e))

	return NewSubmission(
		name=name.strip(),
		email=email.strip() if email and email.strip() else EMAIL_NOT_PROVIDED,
		accessors_name=accessors_name.strip() if accessors_name is not None else None,
		accessors_email=accessors_email.strip() if accessors_email is not None else None,
		responses=responses_json,
		total_score=int(total_score),
		section_scores=section_scores_json,
		completed_at=utcnow(),
	)


def describe_submission(record: SubmissionRecord, catalog: Catalog) -> Dict[str, Any]:
	"""Label a stored submission's raw answers with the catalog's wording."""
	responses = ResponseSet.from_json(record.responses)
	try:
		scores = {s.section: s for s in section_scores_from_json(record.section_scores)}
	except ValueError:
		scores = {}
	sections: List[Dict[str, Any]] = []
	for s_idx, section in enumerate(catalog.sections):
		answers = []
		for c_idx, criterion in enumerate(section.criteria):
			answer = responses.get(s_idx, c_idx)
			answers.append({
				"criterion": criterion.description,
				"inputType": criterion.input_type,
				"possible": criterion.points,
				"selectedOption": answer.selected_option if answer else None,
				"points": answer.points if answer else 0,
				"answered": answer is not None,
			})
		stored = scores.get(section.name)
		sections.append({
			"section": section.name,
			"score": stored.score if stored else sum(a["points"] for a in answers),
			"totalPoints": section.total_points,
			"answers": answers,
		})
	return {"totalScore": record.total_score, "totalPossible": catalog.total_possible, "sections": sections}
