from __future__ import annotations
from fastapi import Request

from .catalogs import QuizVariant
from .settings import Settings
from .storage import SubmissionStore


def get_settings(request: Request) -> Settings:
	return request.app.state.settings


def get_variant(request: Request) -> QuizVariant:
	return request.app.state.variant


def get_store(request: Request) -> SubmissionStore:
	return request.app.state.store
