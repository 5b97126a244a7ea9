from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import QuizStateError
from .session import QuizSession


@dataclass
class Outcome:
	ok: bool
	message: str
	status_code: Optional[int] = None
	data: Any = None
	id: Optional[int] = None


class AssessmentClient:
	"""Talks to the assessment API the way the form and dashboard pages do.

	Failures never raise: they come back as an ``Outcome`` with ``ok=False``
	and a message suitable for showing inline, and the caller's state is left
	alone so the action can be retried.
	"""

	def __init__(
		self,
		base_url: str = "",
		*,
		timeout: float = 30,
		transport: Optional[httpx.BaseTransport] = None,
		http_client: Optional[httpx.Client] = None,
	) -> None:
		self._client = http_client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

	def close(self) -> None:
		self._client.close()

	def __enter__(self) -> "AssessmentClient":
		return self

	def __exit__(self, *exc) -> None:
		self.close()

	def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
		return self._client.post(path, json=payload)

	def submit(self, session: QuizSession) -> Outcome:
		try:
			payload = session.submission_payload()
		except QuizStateError as e:
			return Outcome(ok=False, message=f"Cannot submit assessment: {e}")
		try:
			resp = self._post("/api/quiz", payload)
			body = resp.json()
		except (httpx.HTTPError, ValueError) as e:
			return Outcome(ok=False, message=f"Error submitting assessment: {e}. Please try again.")
		if resp.is_success:
			session.submission_id = body.get("id")
			return Outcome(ok=True, message="Assessment submitted successfully!", status_code=resp.status_code, id=body.get("id"))
		return Outcome(
			ok=False,
			message=f"Failed to submit assessment: {body.get('error') or 'Unknown error'}. Please try again.",
			status_code=resp.status_code,
		)

	def _admin(self, password: str, action: str, record_id: Optional[int] = None) -> Outcome:
		payload: Dict[str, Any] = {"password": password, "action": action}
		if record_id is not None:
			payload["id"] = record_id
		try:
			resp = self._post("/api/admin", payload)
			body = resp.json()
		except (httpx.HTTPError, ValueError) as e:
			return Outcome(ok=False, message=f"Network error: {e}")
		if resp.is_success:
			return Outcome(ok=True, message=body.get("message", ""), status_code=resp.status_code, data=body.get("data"))
		return Outcome(ok=False, message=body.get("error") or "Unknown error", status_code=resp.status_code)

	def admin_get_all(self, password: str) -> Outcome:
		return self._admin(password, "getAll")

	def admin_get(self, password: str, record_id: int) -> Outcome:
		return self._admin(password, "getById", record_id)

	def admin_delete(self, password: str, record_id: int) -> Outcome:
		return self._admin(password, "delete", record_id)
