from __future__ import annotations
import random
from typing import Optional

from .catalogs import QuizVariant
from .errors import QuizStateError
from .gate import UserInfo
from .responses import section_scores_to_json
from .session import QuizSession
from .storage import NewSubmission, utcnow

NAMES = ["Alice Johnson", "Bob Smith", "Carol Davis", "David Wilson", "Emma Brown", "Frank Miller"]
EMAILS = ["alice@example.com", "bob@test.com", "carol@demo.org", "david@sample.net", "emma@random.co", "frank@temp.io"]
ASSESSORS = [("Dr. Grace Lee", "grace.lee@clinic.org"), ("Dr. Omar Haddad", "o.haddad@clinic.org")]
FREE_TEXT = [
	"Thailand, Vietnam, Cambodia for backpacking trip",
	"2 weeks in Thailand, 1 week in Vietnam",
	"No chronic conditions, no known allergies",
	"Only routine vaccines, no travel-specific ones",
	"Will drink bottled water and avoid street food",
	"",
	"n/a",
]


def build_dummy_submission(variant: QuizVariant, rng: Optional[random.Random] = None) -> NewSubmission:
	"""A completed submission with random answers, scored like a real one."""
	rng = rng or random.Random()
	assessor_name, assessor_email = rng.choice(ASSESSORS)
	session = QuizSession.for_variant(variant)
	problems = session.begin(UserInfo(
		name=rng.choice(NAMES),
		email=rng.choice(EMAILS),
		accessors_name=assessor_name,
		accessors_email=assessor_email,
	))
	if problems:
		raise QuizStateError("Seed user info rejected", details=str(problems))
	for s_idx, c_idx, criterion in variant.catalog.flatten():
		if criterion.options:
			option = rng.choice(criterion.options)
		else:
			option = rng.choice(FREE_TEXT)
		session.answer(s_idx, c_idx, option)
	summary = session.calculate_scores()
	info = session.user_info
	return NewSubmission(
		name=info.name,
		email=info.email,
		accessors_name=info.accessors_name,
		accessors_email=info.accessors_email,
		responses=session.responses.to_json(),
		total_score=summary.total_score,
		section_scores=section_scores_to_json(summary.section_scores),
		completed_at=utcnow(),
	)
