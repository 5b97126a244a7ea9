from __future__ import annotations
import logging
import secrets
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..catalogs import QuizVariant
from ..deps import get_settings, get_store, get_variant
from ..errors import AdminUnauthorized, AssessmentError, RecordNotFound, SubmissionInvalid
from ..settings import Settings
from ..storage import SubmissionStore
from ..submissions import describe_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


class AdminRequest(BaseModel):
	# any JSON value; anything but the exact secret is a mismatch
	password: Optional[Any] = None
	action: Optional[str] = None
	id: Optional[Union[int, str]] = None


def check_password(supplied: Any, expected: str) -> bool:
	if not isinstance(supplied, str):
		return False
	return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def _parse_id(raw: Union[int, str]) -> Optional[int]:
	try:
		return int(str(raw).strip())
	except ValueError:
		return None


@router.post("/admin")
def admin(
	req: AdminRequest,
	settings: Settings = Depends(get_settings),
	store: SubmissionStore = Depends(get_store),
	variant: QuizVariant = Depends(get_variant),
):
	if not check_password(req.password, settings.admin_password):
		logger.warning("Rejected admin request with invalid password")
		raise AdminUnauthorized()

	# 0 and "" count as no id
	has_id = req.id not in (None, "", 0)
	try:
		if req.action == "getAll":
			records = store.list_all()
			return {"success": True, "data": [r.to_public() for r in records]}

		if req.action == "getById" and has_id:
			record_id = _parse_id(req.id)
			record = store.get(record_id) if record_id is not None else None
			if record is None:
				raise RecordNotFound("Response not found")
			return {
				"success": True,
				"data": record.to_public(),
				"breakdown": describe_submission(record, variant.catalog),
			}

		if req.action == "delete" and has_id:
			record_id = _parse_id(req.id)
			if record_id is None or not store.delete(record_id):
				raise RecordNotFound("Response not found or could not be deleted")
			logger.info("Deleted quiz response %s", record_id)
			return {"success": True, "message": "Response deleted successfully"}
	except AssessmentError:
		raise
	except Exception:
		logger.exception("Error in admin API")
		raise AssessmentError("Internal server error")

	raise SubmissionInvalid("Invalid action")
