"""Process configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        return float(raw) if raw.strip() else default
    except ValueError:
        return default


@dataclass
class Settings:
    """Everything the bot needs to know at startup.

    Built once by ``Settings.from_env()`` and handed to every component that
    needs it. A missing API key leaves the matching vendor disabled.
    """

    # Identity & access
    telegram_token: str | None = None
    allowed_telegram_user_id: int = 0
    founder_whatsapp_number: str = ""
    whatsapp_bridge_url: str = "http://127.0.0.1:3001"
    whatsapp_poll_interval: float = 2.0
    company_name: str = "XCircle"
    founder_name: str = "Mesfer_Ali"

    # AI engines
    groq_api_key: str | None = None
    groq_model: str = "llama-3.3-70b-versatile"
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-sonnet-20240620"
    google_api_key: str | None = None
    google_model: str = "gemini-1.5-pro"

    # Search & agentic
    brave_api_key: str | None = None
    zai_api_key: str | None = None

    # Memory
    supermemory_api_key: str | None = None
    supermemory_workspace_id: str = "default"

    # Email
    email_host: str | None = None
    email_port: int = 587
    email_user: str | None = None
    email_pass: str | None = None
    email_from_name: str = "XCircle Digital COO"
    accounting_email: str | None = None
    meeting_invite_email: str | None = None

    log_dir: Path = field(default_factory=lambda: Path.home() / ".digital-coo" / "logs")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the current environment."""
        log_dir = os.getenv("COO_LOG_DIR")
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN") or None,
            allowed_telegram_user_id=_int_env("ALLOWED_TELEGRAM_USER_ID", 0),
            founder_whatsapp_number=os.getenv("FOUNDER_WHATSAPP_NUMBER", ""),
            whatsapp_bridge_url=os.getenv("WHATSAPP_BRIDGE_URL", "http://127.0.0.1:3001"),
            whatsapp_poll_interval=_float_env("WHATSAPP_POLL_INTERVAL", 2.0),
            company_name=os.getenv("COMPANY_NAME", "XCircle"),
            founder_name=os.getenv("FOUNDER_NAME", "Mesfer_Ali"),
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            groq_model=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            anthropic_model=os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20240620"),
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            google_model=os.getenv("GOOGLE_MODEL", "gemini-1.5-pro"),
            brave_api_key=os.getenv("BRAVE_API_KEY") or None,
            zai_api_key=os.getenv("ZAI_API_KEY") or None,
            supermemory_api_key=os.getenv("SUPERMEMORY_API_KEY") or None,
            supermemory_workspace_id=os.getenv("SUPERMEMORY_WORKSPACE_ID", "default"),
            email_host=os.getenv("EMAIL_HOST") or None,
            email_port=_int_env("EMAIL_PORT", 587),
            email_user=os.getenv("EMAIL_USER") or None,
            email_pass=os.getenv("EMAIL_PASS") or None,
            email_from_name=os.getenv("EMAIL_FROM_NAME", "XCircle Digital COO"),
            accounting_email=os.getenv("ACCOUNTING_EMAIL") or None,
            meeting_invite_email=os.getenv("MEETING_INVITE_EMAIL") or None,
            log_dir=Path(log_dir) if log_dir else Path.home() / ".digital-coo" / "logs",
        )

    @property
    def telegram_token_valid(self) -> bool:
        """Telegram tokens look like ``<bot id>:<secret>``."""
        return bool(self.telegram_token) and ":" in (self.telegram_token or "")

    @property
    def smtp_configured(self) -> bool:
        return bool(self.email_host and self.email_user and self.email_pass)
