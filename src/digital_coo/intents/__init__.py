"""Intent classification for inbound messages."""

from .router import (
    DEFAULT_RULES,
    IntentFlow,
    IntentRouter,
    RoutedIntent,
    RoutingRule,
    extract_save_content,
    route,
)

__all__ = [
    "DEFAULT_RULES",
    "IntentFlow",
    "IntentRouter",
    "RoutedIntent",
    "RoutingRule",
    "extract_save_content",
    "route",
]
