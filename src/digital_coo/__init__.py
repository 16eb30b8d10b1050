"""Digital COO: a Telegram and WhatsApp executive assistant."""

__version__ = "0.1.0"
