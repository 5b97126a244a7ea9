from __future__ import annotations
import abc
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .settings import Settings


class NewSubmission(BaseModel):
	name: str
	email: str
	accessors_name: Optional[str] = None
	accessors_email: Optional[str] = None
	responses: str
	total_score: int = Field(ge=0)
	section_scores: str
	completed_at: Optional[datetime] = None


class SubmissionRecord(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: int
	name: str
	email: str
	accessors_name: Optional[str] = Field(default=None, alias="accessorsName")
	accessors_email: Optional[str] = Field(default=None, alias="accessorsEmail")
	responses: str
	total_score: int = Field(alias="totalScore")
	section_scores: str = Field(alias="sectionScores")
	completed_at: str = Field(alias="completedAt")

	def to_public(self) -> dict:
		return self.model_dump(by_alias=True)


def format_timestamp(value: datetime) -> str:
	# Naive datetimes are UTC
	if value.tzinfo is not None:
		value = value.astimezone(timezone.utc).replace(tzinfo=None)
	return value.isoformat(timespec="milliseconds") + "Z"


def utcnow() -> datetime:
	return datetime.now(timezone.utc).replace(tzinfo=None)


class SubmissionStore(abc.ABC):
	"""Where finished submissions live.

	``list_all`` returns newest first by completion time. ``get`` and
	``delete`` report a missing id as ``None``/``False``; only driver and
	transport failures raise, as ``StorageError``.
	"""

	backend = "abstract"

	@abc.abstractmethod
	def save(self, submission: NewSubmission) -> int:
		...

	@abc.abstractmethod
	def list_all(self) -> List[SubmissionRecord]:
		...

	@abc.abstractmethod
	def get(self, record_id: int) -> Optional[SubmissionRecord]:
		...

	@abc.abstractmethod
	def delete(self, record_id: int) -> bool:
		...

	def close(self) -> None:
		pass


def build_store(settings: Settings) -> SubmissionStore:
	backend = (settings.storage_backend or "sql").strip().lower()
	if backend == "sql":
		from .sql_store import SqlSubmissionStore
		return SqlSubmissionStore(settings.database_url)
	if backend == "turso":
		if not settings.turso_database_url or not settings.turso_auth_token:
			raise ValueError("STORAGE_BACKEND=turso needs TURSO_DATABASE_URL and TURSO_AUTH_TOKEN")
		from .turso_store import TursoSubmissionStore
		return TursoSubmissionStore(
			settings.turso_database_url,
			settings.turso_auth_token,
			timeout=settings.storage_timeout_seconds,
		)
	raise ValueError(f"Unknown STORAGE_BACKEND '{settings.storage_backend}' (expected 'sql' or 'turso')")
