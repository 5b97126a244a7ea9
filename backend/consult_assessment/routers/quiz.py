from __future__ import annotations
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from ..catalogs import QuizVariant
from ..deps import get_store, get_variant
from ..errors import StorageError
from ..storage import SubmissionStore
from ..submissions import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quiz"])


@router.get("/catalog")
def get_catalog(variant: QuizVariant = Depends(get_variant)):
	data = variant.catalog.to_public()
	data["scoringPolicy"] = variant.policy.name
	data["requireAssessor"] = variant.require_assessor
	return data


@router.post("/quiz", status_code=201)
def submit_quiz(
	body: Dict[str, Any] = Body(...),
	variant: QuizVariant = Depends(get_variant),
	store: SubmissionStore = Depends(get_store),
):
	submission = validate_submission(body, require_assessor=variant.require_assessor)
	try:
		response_id = store.save(submission)
	except StorageError as e:
		logger.error("Error saving quiz response: %s", e.details or e.message)
		raise StorageError("Failed to save quiz response", details=e.details or e.message)
	logger.info("Saved quiz response %s (score %d)", response_id, submission.total_score)
	return {"success": True, "message": "Quiz response saved successfully", "id": response_id}
