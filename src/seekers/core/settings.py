"""Application settings and configuration.

This module defines all configuration options for the Seekers of Dao forum.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Seekers of Dao", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    post_noun: str = Field(default="Enlightenment", alias="POST_NOUN")
    copyright_year: int = Field(default=2024, alias="COPYRIGHT_YEAR")

    # Security
    secret_key: str = Field(alias="SECRET_KEY")
    identity_pepper: str | None = Field(default=None, alias="IDENTITY_PEPPER")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Database configuration
    database_url: str = Field(default="sqlite:///./seekers.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    create_tables_on_startup: bool = Field(default=True, alias="CREATE_TABLES_ON_STARTUP")

    # Session cookie
    session_cookie_name: str = Field(default="seekers_session", alias="SESSION_COOKIE_NAME")
    session_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 14,
        alias="SESSION_MAX_AGE_SECONDS",
    )
    session_https_only: bool = Field(default=False, alias="SESSION_HTTPS_ONLY")

    # Google OAuth 2.0 / OpenID Connect
    google_client_id: str | None = Field(default=None, alias="GOOGLE_CLIENT_ID")
    google_client_secret: str | None = Field(default=None, alias="GOOGLE_CLIENT_SECRET")
    google_redirect_uri: str = Field(
        default="http://localhost:3000/auth/google/callback",
        alias="GOOGLE_REDIRECT_URI",
    )
    google_http_timeout_seconds: float = Field(
        default=10.0,
        alias="GOOGLE_HTTP_TIMEOUT_SECONDS",
    )

    # Username-only register/login forms
    local_login_enabled: bool = Field(default=True, alias="LOCAL_LOGIN_ENABLED")

    # Content limits
    username_max_length: int = Field(default=40, alias="USERNAME_MAX_LENGTH")
    post_title_max_length: int = Field(default=200, alias="POST_TITLE_MAX_LENGTH")
    post_content_max_length: int = Field(default=5000, alias="POST_CONTENT_MAX_LENGTH")
    sect_name_max_length: int = Field(default=60, alias="SECT_NAME_MAX_LENGTH")

    # Profile catalogues
    avatar_choices: list[str] = Field(
        default=[
            "/images/profilePictures/pic1.jpeg",
            "/images/profilePictures/pic2.jpeg",
            "/images/profilePictures/pic3.jpeg",
            "/images/profilePictures/pic4.jpeg",
        ],
        alias="AVATAR_CHOICES",
    )
    frame_choices: list[str] = Field(
        default=[
            "/images/profilePictures/frame1.png",
            "/images/profilePictures/frame2.png",
            "/images/profilePictures/frame3.png",
        ],
        alias="FRAME_CHOICES",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def identity_key(self) -> bytes:
        """Return the HMAC key used to derive identity hashes."""
        return (self.identity_pepper or self.secret_key).encode("utf-8")

    @property
    def google_enabled(self) -> bool:
        """Return True when Google sign-in is configured."""
        return bool(self.google_client_id and self.google_client_secret)


settings = Settings()  # type: ignore[call-arg]
