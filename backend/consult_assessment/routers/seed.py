from __future__ import annotations
import logging

from fastapi import APIRouter, Depends

from ..catalogs import QuizVariant
from ..deps import get_store, get_variant
from ..errors import StorageError
from ..seed import build_dummy_submission
from ..storage import SubmissionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["test"])


@router.api_route("/test", methods=["GET", "POST"], status_code=201)
def create_dummy_record(
	variant: QuizVariant = Depends(get_variant),
	store: SubmissionStore = Depends(get_store),
):
	submission = build_dummy_submission(variant)
	try:
		response_id = store.save(submission)
	except StorageError as e:
		logger.error("Error creating dummy record: %s", e.details or e.message)
		raise StorageError("Failed to create dummy record", details=e.details or e.message)
	logger.info("Dummy record created with ID %s", response_id)
	return {"success": True, "message": "Dummy record created successfully", "id": response_id}
