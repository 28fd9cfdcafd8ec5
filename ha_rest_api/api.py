"""Low level API helpers for the Home Assistant REST API.

This module provides the exceptions raised by the client, the transport
functions performing authenticated requests, the decoders turning
responses into typed records, and the builders for endpoint paths.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

import httpx
import voluptuous as vol

from . import schemas
from .const import (
    DEFAULT_TIMEOUT,
    HISTORY_FLAG_MINIMAL_RESPONSE,
    HISTORY_FLAG_NO_ATTRIBUTES,
    HISTORY_FLAG_SIGNIFICANT_CHANGES_ONLY,
    PATH_CAMERA_PROXY,
    PATH_ERROR_LOG,
    PATH_EVENTS,
    PATH_HISTORY,
    PATH_LOGBOOK,
    PATH_SERVICES,
    PATH_STATES,
    SERVICE_FLAG_RETURN_RESPONSE,
    USER_AGENT,
)
from .models import (
    Attributes,
    Config,
    ConfigCheckResult,
    Context,
    Event,
    HistoryPoint,
    LogbookEntry,
    SimpleMessage,
    State,
    UnitSystem,
)

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

# HTTP status codes
HTTP_OK = 200
HTTP_MULTIPLE_CHOICES = 300
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403


class HomeAssistantApiError(Exception):
    """Base exception for Home Assistant API client errors."""


class MissingCredentialError(HomeAssistantApiError):
    """Raised when neither an explicit value nor a fallback is available."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class HomeAssistantHttpError(HomeAssistantApiError):
    """Raised when a status-checked endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Request failed: {status_code}")


class HomeAssistantAuthError(HomeAssistantHttpError):
    """Raised when the bearer token is rejected."""


class HomeAssistantDecodeError(HomeAssistantApiError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid response: {details}")


class HomeAssistantTransportError(HomeAssistantApiError):
    """Raised when the request could not be sent or the response not read."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Transport error: {cause!r}")


class HomeAssistantNotSupportedError(HomeAssistantApiError):
    """Raised by operations the client does not implement."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported")


class StatusPolicy(Enum):
    """Whether an endpoint turns a non-2xx status into an error."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"


def create_headers(token: str) -> dict[str, str]:
    """Create HTTP headers for Home Assistant API requests.

    Args:
        token: Long-lived access token sent as bearer credential.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    return {
        "authorization": f"Bearer {token}",
        "content-type": "application/json",
        "accept": "application/json, text/plain, */*",
        "user-agent": USER_AGENT,
    }


def is_http_error(status: int) -> bool:
    """Check if HTTP status code is outside the 2xx range.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is not a success code, False otherwise.

    """
    return not HTTP_OK <= status < HTTP_MULTIPLE_CHOICES


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates a rejected token.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 401 or 403, False otherwise.

    """
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def validate_status(response: httpx.Response) -> None:
    """Raise if the response status is not a success code.

    Only the status is inspected; the body of an error response is ignored.

    Raises:
        HomeAssistantAuthError: If the token was rejected.
        HomeAssistantHttpError: For any other non-2xx status.

    """
    if not is_http_error(response.status_code):
        return

    if is_auth_error(response.status_code):
        raise HomeAssistantAuthError(response.status_code)

    raise HomeAssistantHttpError(response.status_code)


def validate_response(
    response: httpx.Response,
    schema: Callable[[Any], Any],
    policy: StatusPolicy = StatusPolicy.CHECKED,
) -> Any:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.
        schema: Voluptuous schema the JSON body must satisfy.
        policy: Status policy of the calling endpoint.

    Returns:
        JSON data from the response, as returned by the schema.

    Raises:
        HomeAssistantHttpError: If the status is checked and not 2xx.
        HomeAssistantDecodeError: If the body is not JSON or fails the schema.

    """
    if policy is StatusPolicy.CHECKED:
        validate_status(response)

    try:
        data = response.json()
    except ValueError as err:
        error_message = f"body is not valid JSON: {err}"
        raise HomeAssistantDecodeError(error_message) from err

    try:
        return schema(data)
    except vol.Invalid as err:
        raise HomeAssistantDecodeError(str(err)) from err


def read_text(response: httpx.Response, policy: StatusPolicy) -> str:
    """Return the body as text, checking the status only under CHECKED."""
    _apply_status_policy(response, policy)
    return response.text


def read_bytes(response: httpx.Response, policy: StatusPolicy) -> bytes:
    """Return the raw body, checking the status only under CHECKED."""
    _apply_status_policy(response, policy)
    return response.content


def _apply_status_policy(response: httpx.Response, policy: StatusPolicy) -> None:
    if policy is StatusPolicy.CHECKED:
        validate_status(response)
    elif is_http_error(response.status_code):
        _LOGGER.warning(
            "Returning response body despite status %d", response.status_code
        )


def _decode(data: Any, extractor: Callable[[Any], _T]) -> _T:
    try:
        return extractor(data)
    except (KeyError, TypeError, ValueError) as err:
        raise HomeAssistantDecodeError(str(err)) from err


def extract_unit_system(data: dict[str, Any]) -> UnitSystem:
    """Build a UnitSystem, keeping units beyond the four named ones."""
    extra = {
        key: value
        for key, value in data.items()
        if key not in schemas.UNIT_SYSTEM_KEYS
    }
    return UnitSystem(
        length=data["length"],
        mass=data["mass"],
        temperature=data["temperature"],
        volume=data["volume"],
        extra=extra,
    )


def extract_config(data: dict[str, Any]) -> Config:
    """Extract the core configuration from a validated response.

    Args:
        data: Response data validated against CONFIG_SCHEMA.

    Returns:
        Config object.

    """
    return Config(
        components=list(data["components"]),
        config_dir=data["config_dir"],
        elevation=data["elevation"],
        latitude=data["latitude"],
        location_name=data["location_name"],
        longitude=data["longitude"],
        time_zone=data["time_zone"],
        unit_system=extract_unit_system(data["unit_system"]),
        version=data["version"],
        whitelist_external_dirs=list(data["whitelist_external_dirs"]),
    )


def extract_events(data: list[dict[str, Any]]) -> list[Event]:
    """Extract event types and listener counts."""
    return [
        Event(event=item["event"], listener_count=item["listener_count"])
        for item in data
    ]


def extract_attributes(data: dict[str, Any] | None) -> Attributes | None:
    """Split entity attributes into named fields and an open map.

    Args:
        data: Raw attributes mapping, or None.

    Returns:
        Attributes object, or None if the entity reported no attributes.

    """
    if data is None:
        return None
    extra = {
        key: value for key, value in data.items() if key not in schemas.ATTRIBUTE_KEYS
    }
    return Attributes(
        friendly_name=data.get("friendly_name"),
        editable=data.get("editable"),
        id=data.get("id"),
        source=data.get("source"),
        user_id=data.get("user_id"),
        icon=data.get("icon"),
        extra=extra,
    )


def extract_context(data: dict[str, Any] | None) -> Context | None:
    """Extract the context of a state change."""
    if data is None:
        return None
    return Context(
        id=data["id"],
        parent_id=data.get("parent_id"),
        user_id=data.get("user_id"),
    )


def extract_history(data: list[list[dict[str, Any]]]) -> list[HistoryPoint]:
    """Flatten the per-entity history lists into a single list.

    Args:
        data: One inner list of state points per entity.

    Returns:
        All points, entity by entity, in the order the server sent them.

    """
    return [
        HistoryPoint(
            state=point["state"],
            last_changed=point["last_changed"],
            entity_id=point.get("entity_id"),
            attributes=extract_attributes(point.get("attributes")),
            last_updated=point.get("last_updated"),
        )
        for entity_points in data
        for point in entity_points
    ]


def extract_logbook(data: list[dict[str, Any]]) -> list[LogbookEntry]:
    """Extract logbook entries.

    Entries triggered by a user carry ``context_user_id`` instead of
    ``context_id``; both land in ``context_id``.
    """
    return [
        LogbookEntry(
            name=item["name"],
            entity_id=item["entity_id"],
            when=item["when"],
            message=item.get("message"),
            source=item.get("source"),
            context_id=item.get("context_id", item.get("context_user_id")),
            domain=item.get("domain"),
        )
        for item in data
    ]


def extract_state(data: dict[str, Any]) -> State:
    """Extract a single entity state."""
    return State(
        state=data["state"],
        entity_id=data.get("entity_id"),
        attributes=extract_attributes(data.get("attributes")),
        last_changed=data.get("last_changed"),
        last_reported=data.get("last_reported"),
        last_updated=data.get("last_updated"),
        context=extract_context(data.get("context")),
    )


def extract_states(data: list[dict[str, Any]]) -> list[State]:
    """Extract a list of entity states."""
    return [extract_state(item) for item in data]


def extract_simple_message(data: dict[str, Any]) -> SimpleMessage:
    """Extract an acknowledgement message."""
    return SimpleMessage(message=data["message"])


def extract_config_check(data: dict[str, Any]) -> ConfigCheckResult:
    """Extract the outcome of a configuration check."""
    return ConfigCheckResult(
        result=data["result"],
        errors=data.get("errors"),
        warnings=data.get("warnings"),
    )


def decode_response(
    response: httpx.Response,
    schema: Callable[[Any], Any],
    extractor: Callable[[Any], _T],
    policy: StatusPolicy = StatusPolicy.CHECKED,
) -> _T:
    """Validate a response and convert it into typed records.

    Raises:
        HomeAssistantHttpError: If the status is checked and not 2xx.
        HomeAssistantDecodeError: If the body does not match the schema.

    """
    data = validate_response(response, schema, policy)
    return _decode(data, extractor)


def history_path(
    entity_id: str | None,
    *,
    minimal_response: bool = False,
    no_attributes: bool = False,
    significant_changes_only: bool = False,
) -> str:
    """Build the history path. Flags are appended as bare query tokens."""
    path = f"{PATH_HISTORY}?filter_entity_id={entity_id or ''}"
    flags = (
        (minimal_response, HISTORY_FLAG_MINIMAL_RESPONSE),
        (no_attributes, HISTORY_FLAG_NO_ATTRIBUTES),
        (significant_changes_only, HISTORY_FLAG_SIGNIFICANT_CHANGES_ONLY),
    )
    for enabled, flag in flags:
        if enabled:
            path += f"&{flag}"
    return path


def logbook_path(entity_id: str | None, *, wire_compat: bool = True) -> str:
    """Build the logbook path, with the entity id as the whole query string.

    With ``wire_compat`` a missing entity id still leaves a bare ``?``.
    """
    if entity_id or wire_compat:
        return f"{PATH_LOGBOOK}?{entity_id or ''}"
    return PATH_LOGBOOK


def error_log_path(*, wire_compat: bool = True) -> str:
    """Return the path queried for the error log.

    Older releases of this client read ``/api/states`` here; ``wire_compat``
    keeps that request shape.
    """
    return PATH_STATES if wire_compat else PATH_ERROR_LOG


def state_path(entity_id: str) -> str:
    """Build the path of a single entity state."""
    return f"{PATH_STATES}/{entity_id}"


def camera_proxy_path(entity_id: str, time: int) -> str:
    """Build the camera proxy path for a unix timestamp in seconds."""
    return f"{PATH_CAMERA_PROXY}/{entity_id}?time={int(time)}"


def event_path(event_type: str) -> str:
    """Build the path used to fire an event."""
    return f"{PATH_EVENTS}/{event_type}"


def service_path(domain: str, service: str, *, return_response: bool = False) -> str:
    """Build the path used to call a service."""
    path = f"{PATH_SERVICES}/{domain}/{service}"
    if return_response:
        path += f"?{SERVICE_FLAG_RETURN_RESPONSE}"
    return path


def create_session_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the pooled HTTP client shared by all calls of a client.

    Args:
        timeout: Per-request timeout in seconds.

    Returns:
        Configured httpx AsyncClient that follows redirects.

    """
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


async def async_get(
    session: httpx.AsyncClient,
    base_url: str,
    token: str,
    path: str,
) -> httpx.Response:
    """Perform an authenticated GET request.

    Args:
        session: HTTP client session.
        base_url: Base URL of the instance, without trailing slash.
        token: Long-lived access token.
        path: Path starting with ``/``, including any query string.

    Returns:
        The raw response, whatever its status.

    Raises:
        HomeAssistantTransportError: If the request fails.

    """
    url = base_url + path
    _LOGGER.debug("GET %s", path)
    try:
        response = await session.get(url, headers=create_headers(token))
    except httpx.RequestError as err:
        raise HomeAssistantTransportError(err) from err
    _LOGGER.debug("GET %s returned %d", path, response.status_code)
    return response


async def async_post(
    session: httpx.AsyncClient,
    base_url: str,
    token: str,
    path: str,
    body: Any = None,
) -> httpx.Response:
    """Perform an authenticated POST request.

    Args:
        session: HTTP client session.
        base_url: Base URL of the instance, without trailing slash.
        token: Long-lived access token.
        path: Path starting with ``/``, including any query string.
        body: JSON serializable payload. None sends the request without body.

    Returns:
        The raw response, whatever its status.

    Raises:
        HomeAssistantTransportError: If the request fails.

    """
    url = base_url + path
    headers = create_headers(token)
    _LOGGER.debug("POST %s", path)
    try:
        if body is None:
            response = await session.post(url, headers=headers)
        else:
            response = await session.post(url, headers=headers, json=body)
    except httpx.RequestError as err:
        raise HomeAssistantTransportError(err) from err
    _LOGGER.debug("POST %s returned %d", path, response.status_code)
    return response
