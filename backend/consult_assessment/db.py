from __future__ import annotations
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base


Base = declarative_base()


def make_engine(database_url: str) -> Engine:
	connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
	return create_engine(database_url, connect_args=connect_args, future=True)


def make_sessionmaker(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


# Lightweight migration: databases created before assessor identity was recorded
# lack the accessors_* columns.
def ensure_schema(engine: Engine) -> None:
	inspector = inspect(engine)
	if "quiz_responses" not in set(inspector.get_table_names()):
		return
	cols = {c["name"] for c in inspector.get_columns("quiz_responses")}
	with engine.begin() as conn:
		if "accessors_name" not in cols:
			conn.exec_driver_sql("ALTER TABLE quiz_responses ADD COLUMN accessors_name TEXT")
		if "accessors_email" not in cols:
			conn.exec_driver_sql("ALTER TABLE quiz_responses ADD COLUMN accessors_email TEXT")
