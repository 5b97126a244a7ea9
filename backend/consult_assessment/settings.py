from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Single shared secret for the admin dashboard
	admin_password: str = Field(default="admin123", validation_alias="ADMIN_PASSWORD")

	# Storage can be "sql" (SQLAlchemy, local SQLite by default) or "turso" (remote libSQL over HTTP)
	storage_backend: str = Field(default="sql", validation_alias="STORAGE_BACKEND")
	database_url: str = Field(default="sqlite:///./quiz.db", validation_alias="DATABASE_URL")
	turso_database_url: str | None = Field(default=None, validation_alias="TURSO_DATABASE_URL")
	turso_auth_token: str | None = Field(default=None, validation_alias="TURSO_AUTH_TOKEN")
	storage_timeout_seconds: float = Field(default=10, validation_alias="STORAGE_TIMEOUT_SECONDS")

	# Catalog variant served: "consultation" or "screening"
	quiz_variant: str = Field(default="consultation", validation_alias="QUIZ_VARIANT")
	# Reject catalogs whose section totals disagree with their criteria
	catalog_strict: bool = Field(default=False, validation_alias="CATALOG_STRICT")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
