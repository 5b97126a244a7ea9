import logging

import pytest

from consult_assessment.catalog import Criterion, load_catalog
from consult_assessment.catalogs import VARIANT_KEYS, get_variant
from consult_assessment.errors import CatalogError
from consult_assessment.scoring import KeywordTierPolicy, PositionalDecayPolicy


def _sections(stated=5):
	return [
		{
			"section": "Only",
			"totalPoints": stated,
			"criteria": [
				{"description": "A", "points": 3, "inputType": "binary", "options": ["Yes", "No"]},
				{"description": "B", "points": 2, "inputType": "shortText", "placeholder": "..."},
			],
		}
	]


def test_consultation_variant():
	variant = get_variant("consultation")
	catalog = variant.catalog
	assert isinstance(variant.policy, KeywordTierPolicy)
	assert variant.require_assessor is True
	assert len(catalog) == 7
	assert catalog.total_questions == 47
	assert catalog.total_possible == 150
	assert catalog.total_mismatches() == []


def test_screening_variant_keeps_authored_totals(caplog):
	with caplog.at_level(logging.WARNING):
		variant = get_variant("screening")
	assert isinstance(variant.policy, PositionalDecayPolicy)
	assert variant.require_assessor is False
	assert variant.catalog.total_mismatches() == [("History Taking", 20, 22)]
	assert "History Taking" in caplog.text


def test_screening_variant_rejected_when_strict():
	with pytest.raises(CatalogError):
		get_variant("screening", strict=True)


def test_unknown_variant():
	assert VARIANT_KEYS == ("consultation", "screening")
	with pytest.raises(ValueError):
		get_variant("nope")


def test_criterion_lookup():
	catalog = load_catalog("t", "Test", _sections())
	assert catalog.criterion(0, 1).description == "B"
	with pytest.raises(CatalogError):
		catalog.criterion(1, 0)
	with pytest.raises(CatalogError):
		catalog.criterion(0, 2)
	assert [(s, c) for s, c, _ in catalog.flatten()] == [(0, 0), (0, 1)]


def test_strict_loading_checks_totals():
	assert load_catalog("t", "Test", _sections(stated=5), strict=True).total_possible == 5
	with pytest.raises(CatalogError):
		load_catalog("t", "Test", _sections(stated=6), strict=True)


def test_choice_criteria_need_options():
	with pytest.raises(ValueError):
		Criterion(description="X", points=1, input_type="multiple")
	with pytest.raises(ValueError):
		Criterion(description="X", points=1, input_type="longText", options=("a",))
	with pytest.raises(ValueError):
		Criterion(description="X", points=-1, input_type="shortText")


def test_malformed_catalog_raises_catalog_error():
	bad = _sections()
	bad[0]["criteria"][0]["inputType"] = "slider"
	with pytest.raises(CatalogError):
		load_catalog("t", "Test", bad)


def test_public_shape_uses_camel_case():
	data = load_catalog("t", "Test", _sections()).to_public()
	assert data["totalQuestions"] == 2
	section = data["sections"][0]
	assert section["section"] == "Only"
	assert section["totalPoints"] == 5
	assert section["criteria"][0]["inputType"] == "binary"
	assert section["criteria"][0]["options"] == ("Yes", "No")
	assert "options" not in section["criteria"][1]
