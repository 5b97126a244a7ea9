from __future__ import annotations
from typing import Optional


class AssessmentError(Exception):
	status_code = 500

	def __init__(self, message: str, details: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.details = details

	def to_body(self) -> dict:
		body = {"error": self.message}
		if self.details is not None:
			body["details"] = self.details
		return body


class SubmissionInvalid(AssessmentError):
	status_code = 400


class AdminUnauthorized(AssessmentError):
	status_code = 401

	def __init__(self, message: str = "Invalid password") -> None:
		super().__init__(message)


class RecordNotFound(AssessmentError):
	status_code = 404


class StorageError(AssessmentError):
	status_code = 500


class CatalogError(AssessmentError):
	"""Raised for malformed catalogs or out-of-range catalog positions."""
	status_code = 500


class QuizStateError(AssessmentError):
	"""Raised when a quiz session is driven from a state that does not allow the operation."""
	status_code = 409
