from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .errors import StorageError
from .storage import NewSubmission, SubmissionRecord, SubmissionStore, format_timestamp, utcnow

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS quiz_responses (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	name TEXT NOT NULL,
	email TEXT NOT NULL,
	accessors_name TEXT,
	accessors_email TEXT,
	responses TEXT NOT NULL,
	total_score INTEGER NOT NULL,
	section_scores TEXT NOT NULL,
	completed_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

SELECT_COLUMNS = (
	"SELECT id, name, email, accessors_name, accessors_email, responses, "
	"total_score, section_scores, completed_at FROM quiz_responses"
)


def _encode_arg(value: Any) -> Dict[str, Any]:
	if value is None:
		return {"type": "null"}
	if isinstance(value, bool):
		return {"type": "integer", "value": str(int(value))}
	if isinstance(value, int):
		# integers travel as strings to keep 64-bit precision
		return {"type": "integer", "value": str(value)}
	if isinstance(value, float):
		return {"type": "float", "value": value}
	return {"type": "text", "value": str(value)}


def _decode_value(cell: Dict[str, Any]) -> Any:
	kind = cell.get("type")
	if kind == "null":
		return None
	if kind == "integer":
		return int(cell["value"])
	if kind == "float":
		return float(cell["value"])
	return cell.get("value")


class TursoSubmissionStore(SubmissionStore):
	"""Submissions in a remote libSQL (Turso) database, via its HTTP pipeline API."""

	backend = "turso"

	def __init__(
		self,
		database_url: str,
		auth_token: str,
		*,
		timeout: float = 10,
		transport: Optional[httpx.BaseTransport] = None,
	) -> None:
		base_url = database_url
		if base_url.startswith("libsql://"):
			base_url = "https://" + base_url[len("libsql://"):]
		self._client = httpx.Client(
			base_url=base_url.rstrip("/"),
			headers={"Authorization": f"Bearer {auth_token}"},
			timeout=timeout,
			transport=transport,
		)
		self._execute(CREATE_TABLE_SQL)
		self._ensure_columns()
		logger.info("Connected to Turso database at %s", base_url)

	def _execute(self, sql: str, args: Sequence[Any] = ()) -> Dict[str, Any]:
		payload = {
			"requests": [
				{"type": "execute", "stmt": {"sql": sql, "args": [_encode_arg(a) for a in args]}},
				{"type": "close"},
			]
		}
		try:
			resp = self._client.post("/v2/pipeline", json=payload)
			resp.raise_for_status()
			data = resp.json()
		except httpx.HTTPError as e:
			logger.error("Turso request failed: %s", e)
			raise StorageError("Remote database request failed", details=str(e))
		except ValueError as e:
			raise StorageError("Remote database returned invalid JSON", details=str(e))
		try:
			result = data["results"][0]
		except (KeyError, IndexError, TypeError):
			raise StorageError("Remote database returned an unexpected response", details=str(data)[:500])
		if result.get("type") != "ok":
			message = (result.get("error") or {}).get("message", "unknown error")
			logger.error("Turso rejected statement: %s", message)
			raise StorageError("Remote database rejected the statement", details=message)
		return result["response"]["result"]

	def _rows(self, result: Dict[str, Any]) -> List[Dict[str, Any]]:
		names = [c.get("name") for c in result.get("cols", [])]
		return [dict(zip(names, (_decode_value(cell) for cell in row))) for row in result.get("rows", [])]

	def _ensure_columns(self) -> None:
		cols = {row["name"] for row in self._rows(self._execute("PRAGMA table_info(quiz_responses)"))}
		for column in ("accessors_name", "accessors_email"):
			if column not in cols:
				self._execute(f"ALTER TABLE quiz_responses ADD COLUMN {column} TEXT")

	@staticmethod
	def _to_record(row: Dict[str, Any]) -> SubmissionRecord:
		return SubmissionRecord(
			id=row["id"],
			name=row["name"],
			email=row["email"],
			accessors_name=row.get("accessors_name"),
			accessors_email=row.get("accessors_email"),
			responses=row["responses"],
			total_score=row["total_score"],
			section_scores=row["section_scores"],
			completed_at=str(row["completed_at"]),
		)

	def save(self, submission: NewSubmission) -> int:
		completed_at = format_timestamp(submission.completed_at or utcnow())
		result = self._execute(
			"INSERT INTO quiz_responses (name, email, accessors_name, accessors_email, responses, "
			"total_score, section_scores, completed_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
			[
				submission.name,
				submission.email,
				submission.accessors_name,
				submission.accessors_email,
				submission.responses,
				submission.total_score,
				submission.section_scores,
				completed_at,
			],
		)
		rowid = result.get("last_insert_rowid")
		if rowid is None:
			raise StorageError("Failed to save quiz response", details="no row id returned")
		return int(rowid)

	def list_all(self) -> List[SubmissionRecord]:
		result = self._execute(SELECT_COLUMNS + " ORDER BY completed_at DESC, id DESC")
		return [self._to_record(r) for r in self._rows(result)]

	def get(self, record_id: int) -> Optional[SubmissionRecord]:
		rows = self._rows(self._execute(SELECT_COLUMNS + " WHERE id = ?", [record_id]))
		return self._to_record(rows[0]) if rows else None

	def delete(self, record_id: int) -> bool:
		result = self._execute("DELETE FROM quiz_responses WHERE id = ?", [record_id])
		return int(result.get("affected_row_count") or 0) > 0

	def close(self) -> None:
		self._client.close()
