from __future__ import annotations
import re
from typing import Dict, Optional

from pydantic import BaseModel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_NOT_PROVIDED = "Not provided"


class UserInfo(BaseModel):
	name: str
	email: str = ""
	accessors_name: Optional[str] = None
	accessors_email: Optional[str] = None

	def cleaned(self) -> "UserInfo":
		return UserInfo(
			name=self.name.strip(),
			email=self.email.strip() or EMAIL_NOT_PROVIDED,
			accessors_name=self.accessors_name.strip() if self.accessors_name is not None else None,
			accessors_email=self.accessors_email.strip() if self.accessors_email is not None else None,
		)


def is_valid_email(value: str) -> bool:
	return bool(EMAIL_PATTERN.match(value))


def check_user_info(info: UserInfo, *, require_assessor: bool) -> Dict[str, str]:
	"""Field name -> message for every required field that blocks submission."""
	problems: Dict[str, str] = {}
	if not info.name.strip():
		problems["name"] = "Please enter a name before submitting."
	if require_assessor:
		accessors_name = (info.accessors_name or "").strip()
		accessors_email = (info.accessors_email or "").strip()
		if not accessors_name:
			problems["accessors_name"] = "Please enter the assessor's name before submitting."
		if not accessors_email:
			problems["accessors_email"] = "Please enter the assessor's email before submitting."
		elif not is_valid_email(accessors_email):
			problems["accessors_email"] = "Please enter a valid assessor email address."
	return problems
