import httpx

from consult_assessment.client import AssessmentClient
from consult_assessment.gate import UserInfo
from consult_assessment.session import QuizSession, QuizState

from conftest import ADMIN_PASSWORD


def started_session(variant):
	session = QuizSession.for_variant(variant)
	session.begin(UserInfo(name="Jane Doe", accessors_name="Dr. Lee", accessors_email="lee@clinic.org"))
	return session


def test_submit_one_binary_answer(client, consultation):
	session = started_session(consultation)
	session.answer(1, 0, "Yes")  # worth 3 points
	for _ in range(session.total_questions):
		session.advance()

	api = AssessmentClient(http_client=client)
	outcome = api.submit(session)
	assert outcome.ok
	assert outcome.message == "Assessment submitted successfully!"
	assert session.submission_id == outcome.id

	stored = api.admin_get(ADMIN_PASSWORD, outcome.id)
	assert stored.ok
	assert stored.data["name"] == "Jane Doe"
	assert stored.data["totalScore"] == 3


def test_admin_round_trip(client, consultation):
	api = AssessmentClient(http_client=client)
	record_id = api.submit(started_session(consultation)).id

	assert api.admin_get_all("wrong").status_code == 401
	listing = api.admin_get_all(ADMIN_PASSWORD)
	assert [r["id"] for r in listing.data] == [record_id]

	assert api.admin_delete(ADMIN_PASSWORD, record_id).ok
	second = api.admin_delete(ADMIN_PASSWORD, record_id)
	assert not second.ok
	assert second.status_code == 404


def test_rejected_submit_leaves_session_intact(client, consultation):
	session = started_session(consultation)
	session.answer_current("Yes")
	session.user_info = session.user_info.model_copy(update={"accessors_email": "broken"})

	outcome = AssessmentClient(http_client=client).submit(session)
	assert not outcome.ok
	assert outcome.status_code == 400
	assert "Invalid assessor email format" in outcome.message
	assert session.state is QuizState.IN_PROGRESS
	assert session.responses.get(0, 0).points == 3


def test_network_failure_is_reported_not_raised(consultation):
	def down(request):
		raise httpx.ConnectError("connection refused", request=request)

	session = started_session(consultation)
	session.answer_current("Yes")
	with AssessmentClient("http://quiz.invalid", transport=httpx.MockTransport(down)) as api:
		outcome = api.submit(session)
		listing = api.admin_get_all(ADMIN_PASSWORD)
	assert not outcome.ok
	assert outcome.message.startswith("Error submitting assessment")
	assert not listing.ok
	assert session.submission_id is None
	assert len(session.responses) == 1


def test_submit_before_start(consultation):
	outcome = AssessmentClient("http://quiz.invalid").submit(QuizSession.for_variant(consultation))
	assert not outcome.ok
	assert "not been started" in outcome.message
