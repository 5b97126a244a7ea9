from __future__ import annotations
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from .catalogs import get_variant
from .errors import AssessmentError
from .routers import admin, quiz, seed
from .settings import Settings, settings as default_settings
from .storage import SubmissionStore, build_store

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[SubmissionStore] = None) -> FastAPI:
	settings = settings or default_settings
	logging.basicConfig(
		level=getattr(logging, settings.log_level.upper(), logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)

	app = FastAPI(title="Travel Health Consultation Assessment API")
	app.state.settings = settings
	# Catalog problems surface at startup rather than on first request
	app.state.variant = get_variant(settings.quiz_variant, strict=settings.catalog_strict)
	app.state.store = store

	app.include_router(quiz.router)
	app.include_router(admin.router)
	app.include_router(seed.router)

	@app.exception_handler(AssessmentError)
	async def assessment_error_handler(request: Request, exc: AssessmentError):
		return JSONResponse(status_code=exc.status_code, content=exc.to_body())

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		return JSONResponse(status_code=400, content={"error": "Invalid request body"})

	@app.get("/", include_in_schema=False)
	async def redirect_root_to_docs():
		return RedirectResponse(url="/docs")

	@app.get("/info")
	def info():
		variant = app.state.variant
		return {
			"status": "ok",
			"variant": variant.key,
			"scoring_policy": variant.policy.name,
			"storage_backend": app.state.store.backend if app.state.store else settings.storage_backend,
			"total_questions": variant.catalog.total_questions,
		}

	@app.on_event("startup")
	async def startup_event():
		# Storage driver is picked once, from configuration
		if app.state.store is None:
			app.state.store = build_store(settings)
		logger.info(
			"Serving %s catalog (%d questions) with %s storage",
			app.state.variant.key,
			app.state.variant.catalog.total_questions,
			app.state.store.backend,
		)

	@app.on_event("shutdown")
	async def shutdown_event():
		if app.state.store is not None:
			app.state.store.close()

	return app


app = create_app()
