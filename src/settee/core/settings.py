"""Connection settings for settee.

``SetteeSettings`` reads the server URL, credentials, timeout and logging
options from ``SETTEE_``-prefixed environment variables or a ``.env`` file.

Examples:
    >>> from settee.core.settings import SetteeSettings
    >>> settings = SetteeSettings(url="http://couch.internal:5984")
    >>> settings.base_url
    'http://couch.internal:5984/'

Tags:
    settings, configuration, pydantic, environment, settee
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SetteeSettings(BaseSettings):
    """Settings for a ``Connection``.

    Fields
    ──────
    url        : Server root, e.g. ``http://localhost:5984``
    username   : Basic-auth user (optional)
    password   : Basic-auth password (optional)
    timeout    : Per-request timeout in seconds
    log_level  : Structlog log level
    json_logs  : Render logs as JSON instead of console output
    """

    model_config = SettingsConfigDict(
        env_prefix="SETTEE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────
    url: str = "http://localhost:5984"
    username: str | None = None
    password: SecretStr | None = None
    timeout: float = Field(default=30.0, gt=0)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool = False

    @property
    def base_url(self) -> str:
        """Server root with exactly one trailing slash."""
        return self.url.rstrip("/") + "/"

    @property
    def auth(self) -> tuple[str, str] | None:
        """Basic-auth pair, or ``None`` when no username is configured."""
        if not self.username:
            return None
        password = self.password.get_secret_value() if self.password else ""
        return (self.username, password)
