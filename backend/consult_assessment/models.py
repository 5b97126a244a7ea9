from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String, Text
from .db import Base


class QuizResponseRow(Base):
	__tablename__ = "quiz_responses"
	id = Column(Integer, primary_key=True, autoincrement=True)
	name = Column(String(256), nullable=False)
	email = Column(String(256), nullable=False)
	accessors_name = Column(String(256), nullable=True)
	accessors_email = Column(String(256), nullable=True)
	responses = Column(Text, nullable=False)  # JSON string of the response set
	total_score = Column(Integer, nullable=False)
	section_scores = Column(Text, nullable=False)  # JSON list of section scores
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
