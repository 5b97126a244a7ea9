from __future__ import annotations
import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from .db import Base, ensure_schema, make_engine, make_sessionmaker
from .errors import StorageError
from .models import QuizResponseRow
from .storage import NewSubmission, SubmissionRecord, SubmissionStore, format_timestamp, utcnow

logger = logging.getLogger(__name__)


def _to_record(row: QuizResponseRow) -> SubmissionRecord:
	return SubmissionRecord(
		id=row.id,
		name=row.name,
		email=row.email,
		accessors_name=row.accessors_name,
		accessors_email=row.accessors_email,
		responses=row.responses,
		total_score=row.total_score,
		section_scores=row.section_scores,
		completed_at=format_timestamp(row.completed_at),
	)


class SqlSubmissionStore(SubmissionStore):
	backend = "sql"

	def __init__(self, database_url: str) -> None:
		try:
			self.engine = make_engine(database_url)
			Base.metadata.create_all(bind=self.engine)
			ensure_schema(self.engine)
		except SQLAlchemyError as e:
			logger.error("Failed to connect to database %s: %s", database_url, e)
			raise StorageError("Database connection failed", details=str(e))
		self.SessionLocal = make_sessionmaker(self.engine)
		logger.info("Connected to SQL database (%s)", self.engine.dialect.name)

	def save(self, submission: NewSubmission) -> int:
		row = QuizResponseRow(
			name=submission.name,
			email=submission.email,
			accessors_name=submission.accessors_name,
			accessors_email=submission.accessors_email,
			responses=submission.responses,
			total_score=submission.total_score,
			section_scores=submission.section_scores,
			completed_at=submission.completed_at or utcnow(),
		)
		with self.SessionLocal() as db:
			try:
				db.add(row)
				db.commit()
				db.refresh(row)
			except (SQLAlchemyError, OverflowError) as e:
				db.rollback()
				logger.error("Failed to save quiz response: %s", e)
				raise StorageError("Failed to save quiz response", details=str(e))
			return row.id

	def list_all(self) -> List[SubmissionRecord]:
		with self.SessionLocal() as db:
			try:
				rows = (
					db.query(QuizResponseRow)
					.order_by(QuizResponseRow.completed_at.desc(), QuizResponseRow.id.desc())
					.all()
				)
			except SQLAlchemyError as e:
				logger.error("Failed to get quiz responses: %s", e)
				raise StorageError("Failed to get quiz responses", details=str(e))
			return [_to_record(r) for r in rows]

	def get(self, record_id: int) -> Optional[SubmissionRecord]:
		with self.SessionLocal() as db:
			try:
				row = db.get(QuizResponseRow, record_id)
			except SQLAlchemyError as e:
				logger.error("Failed to get quiz response %s: %s", record_id, e)
				raise StorageError("Failed to get quiz response", details=str(e))
			return _to_record(row) if row is not None else None

	def delete(self, record_id: int) -> bool:
		with self.SessionLocal() as db:
			try:
				res = db.execute(delete(QuizResponseRow).where(QuizResponseRow.id == record_id))
				db.commit()
			except SQLAlchemyError as e:
				db.rollback()
				logger.error("Failed to delete quiz response %s: %s", record_id, e)
				raise StorageError("Failed to delete quiz response", details=str(e))
			return (res.rowcount or 0) > 0

	def close(self) -> None:
		self.engine.dispose()
