"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (auth provider secrets,
asset store credentials) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_backends (secret_key for the jwt auth provider, Cloudinary
    credentials or S3 bucket for the selected asset backend).
    """

    # App
    app_name: str = "headless-cms"
    app_version: str = "1.0.0"
    debug: bool = False
    openapi_title: str = "Headless Firebase API"

    # Firebase / Firestore: use key (env) or path (file). For Vercel, use key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    # Audience for Firebase ID tokens; defaults to the service account project.
    firebase_project_id: str | None = None

    # Auth: "firebase" (verify Firebase ID tokens) or "jwt" (HS256, local/dev)
    auth_provider: str = "firebase"
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Assets: "cloudinary", "s3" or "local"
    asset_backend: str = "cloudinary"
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: SecretStr | None = None
    cloudinary_resource_type: str = "image"
    storage_root: str = "/var/headless-cms/media"
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None

    # Store limits: Firestore commit holds at most 500 writes,
    # Cloudinary delete_resources accepts at most 100 public ids.
    document_batch_limit: int = 500
    asset_batch_limit: int = 100
    asset_delete_concurrency: int = 4

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate auth provider, asset backend and batch limits.

        - jwt: SECRET_KEY required.
        - cloudinary: CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and
          CLOUDINARY_API_SECRET required.
        - s3: S3_BUCKET required.
        """
        if self.auth_provider == "jwt":
            if not self.secret_key.get_secret_value():
                raise ValueError(
                    "SECRET_KEY is required when auth_provider is 'jwt'. "
                    "Generate with: openssl rand -hex 32."
                )
        elif self.auth_provider != "firebase":
            raise ValueError(
                f"auth_provider must be 'firebase' or 'jwt', got: {self.auth_provider!r}"
            )
        if self.asset_backend == "cloudinary":
            missing = [
                name
                for name, value in (
                    ("CLOUDINARY_CLOUD_NAME", self.cloudinary_cloud_name),
                    ("CLOUDINARY_API_KEY", self.cloudinary_api_key),
                    (
                        "CLOUDINARY_API_SECRET",
                        self.cloudinary_api_secret.get_secret_value()
                        if self.cloudinary_api_secret
                        else None,
                    ),
                )
                if not value
            ]
            if missing:
                raise ValueError(
                    f"Missing Cloudinary credentials: {', '.join(missing)}. "
                    "Set them in environment or .env file."
                )
        elif self.asset_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when asset_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.asset_backend != "local":
            raise ValueError(
                f"Invalid asset_backend '{self.asset_backend}'. "
                "Must be one of: 'cloudinary', 's3', 'local'"
            )
        if self.document_batch_limit < 1 or self.asset_batch_limit < 1:
            raise ValueError("Batch limits must be positive")
        if self.asset_delete_concurrency < 1:
            raise ValueError("asset_delete_concurrency must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
