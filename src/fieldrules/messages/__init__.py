"""Message catalog and resolution for failed rules."""

from fieldrules.messages.catalog import (
    DEFAULT_LOCALE,
    DEFAULT_MESSAGE,
    MessageCatalog,
)
from fieldrules.messages.resolver import (
    CustomMessage,
    CustomMessageSpec,
    MessageResolver,
    resolve_message,
    substitute,
)

__all__ = [
    "DEFAULT_LOCALE",
    "DEFAULT_MESSAGE",
    "CustomMessage",
    "CustomMessageSpec",
    "MessageCatalog",
    "MessageResolver",
    "resolve_message",
    "substitute",
]
