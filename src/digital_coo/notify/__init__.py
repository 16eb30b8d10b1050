"""Outbound notifications."""

from .email import Mailer

__all__ = ["Mailer"]
