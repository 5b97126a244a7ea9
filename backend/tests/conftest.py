from __future__ import annotations
import pytest
from fastapi.testclient import TestClient

from consult_assessment.catalogs import get_variant
from consult_assessment.main import create_app
from consult_assessment.settings import Settings
from consult_assessment.sql_store import SqlSubmissionStore

ADMIN_PASSWORD = "s3cret-pass"


def make_settings(**env) -> Settings:
	values = {"ADMIN_PASSWORD": ADMIN_PASSWORD, "STORAGE_BACKEND": "sql", "LOG_LEVEL": "WARNING"}
	values.update(env)
	return Settings(**values)


@pytest.fixture
def consultation():
	return get_variant("consultation")


@pytest.fixture
def screening():
	return get_variant("screening")


@pytest.fixture
def sql_store(tmp_path):
	store = SqlSubmissionStore(f"sqlite:///{tmp_path / 'quiz.db'}")
	yield store
	store.close()


@pytest.fixture
def client(sql_store):
	app = create_app(make_settings(QUIZ_VARIANT="consultation"), store=sql_store)
	with TestClient(app) as c:
		yield c


@pytest.fixture
def screening_client(sql_store):
	app = create_app(make_settings(QUIZ_VARIANT="screening"), store=sql_store)
	with TestClient(app) as c:
		yield c
