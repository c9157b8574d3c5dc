from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, Field
from urllib.parse import urlparse


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "MU Papers Portal"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode (set to false in production)")
    ENVIRONMENT: str = Field(default="production", description="Environment: development, staging, production")

    # Supabase
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_KEY: str = Field(..., description="Supabase anon (public) key")
    STORAGE_BUCKET: str = Field(default="papers", description="Storage bucket holding paper and solution files")

    # Admission state is kept on local disk, one file per client profile
    ADMISSION_STATE_DIR: str = Field(
        default=".mu_papers/admission",
        description="Directory holding one persisted admission flag per client profile"
    )
    CLIENT_PROFILE_COOKIE: str = "mu_client_profile"
    CLIENT_PROFILE_MAX_AGE: int = Field(default=30 * 24 * 60 * 60, description="Profile cookie lifetime in seconds")

    # CORS
    FRONTEND_URL: str = "http://localhost:5173"

    # Server
    PORT: int = Field(default=8000, description="Server port")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator('SUPABASE_URL')
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Validate Supabase URL format."""
        if not v:
            raise ValueError("SUPABASE_URL is required")
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("SUPABASE_URL must be a valid URL (e.g., https://xxxxx.supabase.co)")
        if parsed.scheme not in ['http', 'https']:
            raise ValueError("SUPABASE_URL must use http or https protocol")
        return v

    @field_validator('SUPABASE_KEY')
    @classmethod
    def validate_supabase_key(cls, v: str) -> str:
        """Validate Supabase key is not empty."""
        if not v or len(v.strip()) == 0:
            raise ValueError("SUPABASE_KEY is required and cannot be empty")
        return v

    @field_validator('STORAGE_BUCKET')
    @classmethod
    def validate_bucket(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("STORAGE_BUCKET cannot be empty")
        return v.strip()

    @field_validator('FRONTEND_URL')
    @classmethod
    def validate_frontend_url(cls, v: str) -> str:
        """Validate frontend URL format."""
        if v:
            parsed = urlparse(v)
            if not parsed.scheme or not parsed.netloc:
                raise ValueError("FRONTEND_URL must be a valid URL")
        return v


def validate_settings() -> None:
    """Validate all required settings are present and valid."""
    from app.core.exceptions import ConfigurationError

    try:
        # Re-initialize settings to ensure validation
        global settings
        settings = Settings()
    except Exception as e:
        error_msg = str(e)
        if "required" in error_msg.lower() or "field required" in error_msg.lower():
            missing_field = ""
            for field in ['SUPABASE_URL', 'SUPABASE_KEY']:
                if field.lower() in error_msg.lower():
                    missing_field = field
                    break

            raise ConfigurationError(
                f"Missing required environment variable: {missing_field or 'See error details'}\n"
                f"Please check your .env file and ensure all required variables are set.\n"
                f"Error: {error_msg}",
                error_code="MISSING_ENV_VAR"
            )
        raise ConfigurationError(
            f"Configuration error: {error_msg}\n"
            f"Please check your .env file configuration.",
            error_code="CONFIG_ERROR"
        )

    if not settings.SUPABASE_URL.startswith('https://') and not settings.DEBUG:
        raise ConfigurationError(
            "SUPABASE_URL should use HTTPS in production",
            error_code="INSECURE_URL"
        )


# Initialize settings; missing variables are reported by validate_settings() at startup
try:
    settings = Settings()
except Exception:
    settings = None
