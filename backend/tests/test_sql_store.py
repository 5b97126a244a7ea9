from datetime import datetime

import pytest
from sqlalchemy import create_engine

from consult_assessment.errors import StorageError
from consult_assessment.sql_store import SqlSubmissionStore
from consult_assessment.storage import NewSubmission, build_store, format_timestamp

from conftest import make_settings


def submission(name="Jane Doe", **kwargs):
	values = dict(name=name, email="jane@example.com", responses="{}", total_score=4, section_scores="[]")
	values.update(kwargs)
	return NewSubmission(**values)


def test_save_get_delete(sql_store):
	record_id = sql_store.save(submission(accessors_name="Dr. Lee", accessors_email="lee@clinic.org"))
	record = sql_store.get(record_id)
	assert record.id == record_id
	assert record.accessors_name == "Dr. Lee"
	assert record.total_score == 4
	assert sql_store.delete(record_id) is True
	assert sql_store.get(record_id) is None
	assert sql_store.delete(record_id) is False


def test_completed_at_defaults_to_now(sql_store):
	record = sql_store.get(sql_store.save(submission()))
	stamp = datetime.strptime(record.completed_at, "%Y-%m-%dT%H:%M:%S.%fZ")
	assert abs((datetime.utcnow() - stamp).total_seconds()) < 60


def test_ids_are_distinct(sql_store):
	ids = {sql_store.save(submission(name=f"P{i}")) for i in range(3)}
	assert len(ids) == 3
	assert len(sql_store.list_all()) == 3


def test_old_table_gains_assessor_columns(tmp_path):
	url = f"sqlite:///{tmp_path / 'old.db'}"
	engine = create_engine(url)
	with engine.begin() as conn:
		conn.exec_driver_sql(
			"CREATE TABLE quiz_responses (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, "
			"email TEXT NOT NULL, responses TEXT NOT NULL, total_score INTEGER NOT NULL, "
			"section_scores TEXT NOT NULL, completed_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
		)
	engine.dispose()
	store = SqlSubmissionStore(url)
	try:
		record_id = store.save(submission(accessors_name="Dr. Lee"))
		assert store.get(record_id).accessors_name == "Dr. Lee"
	finally:
		store.close()


def test_unreachable_database_raises_storage_error(tmp_path):
	with pytest.raises(StorageError):
		SqlSubmissionStore(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'quiz.db'}")


def test_format_timestamp():
	assert format_timestamp(datetime(2024, 5, 1, 9, 30, 0, 123456)) == "2024-05-01T09:30:00.123Z"


def test_build_store_selects_backend(tmp_path):
	store = build_store(make_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'q.db'}"))
	try:
		assert store.backend == "sql"
	finally:
		store.close()
	with pytest.raises(ValueError):
		build_store(make_settings(STORAGE_BACKEND="turso"))
	with pytest.raises(ValueError):
		build_store(make_settings(STORAGE_BACKEND="mongo"))


def test_out_of_range_score_raises_storage_error(sql_store):
	oversized = submission().model_copy(update={"total_score": 10**30})
	with pytest.raises(StorageError) as exc:
		sql_store.save(oversized)
	assert exc.value.message == "Failed to save quiz response"
	assert sql_store.list_all() == []
