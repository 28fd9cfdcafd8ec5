"""Typed async client for the Home Assistant REST API."""

from .api import (
    HomeAssistantApiError,
    HomeAssistantAuthError,
    HomeAssistantDecodeError,
    HomeAssistantHttpError,
    HomeAssistantNotSupportedError,
    HomeAssistantTransportError,
    MissingCredentialError,
    StatusPolicy,
)
from .client import HomeAssistantClient
from .const import VERSION as __version__
from .models import (
    Attributes,
    CalendarEntry,
    Config,
    ConfigCheckResult,
    Context,
    Credentials,
    Event,
    HistoryPoint,
    LogbookEntry,
    SimpleMessage,
    State,
    StateUpdateRequest,
    TemplateRequest,
    UnitSystem,
)

__all__ = [
    "Attributes",
    "CalendarEntry",
    "Config",
    "ConfigCheckResult",
    "Context",
    "Credentials",
    "Event",
    "HistoryPoint",
    "HomeAssistantApiError",
    "HomeAssistantAuthError",
    "HomeAssistantClient",
    "HomeAssistantDecodeError",
    "HomeAssistantHttpError",
    "HomeAssistantNotSupportedError",
    "HomeAssistantTransportError",
    "LogbookEntry",
    "MissingCredentialError",
    "SimpleMessage",
    "State",
    "StateUpdateRequest",
    "StatusPolicy",
    "TemplateRequest",
    "UnitSystem",
    "__version__",
]
