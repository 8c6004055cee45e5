from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

# Value shipped in the sample .env; treated the same as a missing key
PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY_HERE"


class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Primary model is tried first; the secondary (larger) model only after a failure
	gemini_model_primary: str = Field(default="gemini-1.5-flash", validation_alias="GEMINI_MODEL")
	gemini_model_secondary: str = Field(default="gemini-1.5-pro", validation_alias="GEMINI_FALLBACK_MODEL")
	gemini_base_url: str = Field(
		default="https://generativelanguage.googleapis.com/v1beta/models",
		validation_alias="GEMINI_BASE_URL",
	)
	# Deadline for a single model attempt, in seconds
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")

	# Auth configuration
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_minutes: int = Field(default=60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Comma separated list, "*" allows any origin
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	def provider_key(self) -> str | None:
		"""Return the usable provider key, or None when unset or still the placeholder."""
		key = (self.gemini_api_key or "").strip()
		if not key or key == PLACEHOLDER_API_KEY:
			return None
		return key

	def cors_origin_list(self) -> list[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
	"""Read configuration fresh for each request so a rotated key applies without a restart."""
	return Settings()


settings = get_settings()
