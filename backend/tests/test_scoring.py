import pytest

from consult_assessment.catalog import Criterion
from consult_assessment.scoring import (
	KeywordTierPolicy,
	PositionalDecayPolicy,
	ScoringPolicy,
	get_policy,
	round_half_up,
	score,
)

QUALITY = ("Excellent", "Good", "Fair", "Poor")


def binary(points=5, options=("Yes", "No")):
	return Criterion(description="Binary", points=points, input_type="binary", options=options)


def multiple(points=4, options=QUALITY):
	return Criterion(description="Multiple", points=points, input_type="multiple", options=options)


def text(points=2, kind="shortText"):
	return Criterion(description="Text", points=points, input_type=kind)


POLICIES = [KeywordTierPolicy(), PositionalDecayPolicy()]


@pytest.mark.parametrize("policy", POLICIES, ids=lambda p: p.name)
@pytest.mark.parametrize("criterion", [binary(), multiple(), text(), text(kind="longText")], ids=lambda c: c.input_type)
@pytest.mark.parametrize("option", ["", "   ", "\t\n", None])
def test_blank_answers_score_zero(policy, criterion, option):
	assert policy.score(option, criterion) == 0


@pytest.mark.parametrize("option", ["Yes", "yes", "  YES  ", "Provided", "discussed", "Completed", "arranged", "Done", "TRUE"])
def test_binary_positive_labels_earn_full_points(option):
	assert score(option, binary(points=5)) == 5


@pytest.mark.parametrize("option", ["No", "Not provided", "Partially provided", "maybe", "y"])
def test_binary_other_labels_earn_nothing(option):
	assert score(option, binary(points=5)) == 0


def test_keyword_tiers_round_half_up():
	c = multiple(points=4)
	assert [score(o, c) for o in QUALITY] == [4, 3, 2, 0]
	# 5 * 0.5 = 2.5 rounds up
	assert score("Fair", multiple(points=5)) == 3
	assert score("Good", multiple(points=3)) == 2


def test_keyword_tier_not_applicable_earns_full_points():
	c = multiple(points=3, options=("Yes, asked", "Not applicable", "Forgot to ask"))
	assert score("Not applicable", c) == 3


def test_keyword_tier_unknown_option_falls_back_to_quarter():
	c = multiple(points=3, options=("Yes, asked", "Not applicable", "Forgot to ask"))
	assert score("Yes, asked", c) == 1
	assert score("Forgot to ask", c) == 1
	# 2 * 0.25 = 0.5 rounds up
	assert score("Anything", multiple(points=2)) == 1


def test_keyword_tier_matches_exact_text_only():
	assert score("excellent", multiple(points=4)) == 1


def test_positional_policy_decays_by_position():
	policy = PositionalDecayPolicy()
	c = multiple(points=5, options=("Consistently", "Usually", "Sometimes", "Rarely"))
	assert [policy.score(o, c) for o in c.options] == [5, 4, 2, 1]


def test_positional_policy_prefers_keyword_tiers():
	policy = PositionalDecayPolicy()
	c = multiple(points=4, options=("Discussed thoroughly", "Discussed", "Mentioned briefly", "Not discussed"))
	assert [policy.score(o, c) for o in c.options] == [4, 3, 2, 0]


def test_positional_policy_unlisted_option_falls_back_to_quarter():
	policy = PositionalDecayPolicy()
	c = multiple(points=4, options=("Provided", "Partially provided", "Not provided"))
	assert policy.score("Provided", c) == 4
	assert policy.score("Partially provided", c) == 2
	assert policy.score("Not provided", c) == 0
	assert policy.score("Something else", c) == 1


@pytest.mark.parametrize("policy", POLICIES, ids=lambda p: p.name)
def test_text_needs_three_characters(policy):
	c = text(points=2)
	assert policy.score("ab", c) == 0
	assert policy.score("  ab  ", c) == 0
	assert policy.score("abc", c) == 2
	assert policy.score("Thailand and Vietnam", text(points=4, kind="longText")) == 4


def test_text_threshold_is_configurable():
	policy = KeywordTierPolicy(min_text_length=2)
	assert policy.score("ok", text(points=1)) == 1


def test_unknown_input_type_scores_zero():
	c = Criterion.model_construct(description="Odd", points=5, input_type="slider", options=None, placeholder=None)
	assert score("Yes", c) == 0


@pytest.mark.parametrize("policy", POLICIES, ids=lambda p: p.name)
def test_scores_stay_within_criterion_points(policy, consultation, screening):
	probes = ["Yes", "No", "Excellent", "Good", "Not applicable", "whatever", "abc", "x"]
	for variant in (consultation, screening):
		for _, _, criterion in variant.catalog.flatten():
			for option in probes + list(criterion.options or ()):
				assert 0 <= policy.score(option, criterion) <= criterion.points


def test_round_half_up():
	assert round_half_up(2.5) == 3
	assert round_half_up(0.7 * 5) == 4
	assert round_half_up(2.25) == 2


def test_get_policy():
	assert isinstance(get_policy("keyword"), KeywordTierPolicy)
	assert isinstance(get_policy("positional", min_text_length=2), PositionalDecayPolicy)
	with pytest.raises(ValueError):
		get_policy("random")


def test_base_policy_is_abstract():
	with pytest.raises(TypeError):
		ScoringPolicy()

	class HalfPolicy(ScoringPolicy):
		def multiple_fraction(self, selected_option, criterion):
			return 0.5

	assert HalfPolicy().score("Anything", multiple(points=4)) == 2
