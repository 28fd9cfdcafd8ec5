"""Home Assistant REST API client.

``HomeAssistantClient`` exposes one coroutine per endpoint. Every call
resolves its credentials, performs a single request through the shared
HTTP session and decodes the response according to the endpoint's
status policy.
"""

from __future__ import annotations

import logging
from os import PathLike
from typing import TYPE_CHECKING, Any

from . import api, schemas
from .api import StatusPolicy
from .const import (
    DEFAULT_TIMEOUT,
    PATH_CHECK_CONFIG,
    PATH_CONFIG,
    PATH_EVENTS,
    PATH_INTENT,
    PATH_SERVICES,
    PATH_STATES,
    PATH_TEMPLATE,
)
from .credentials import CredentialResolver

if TYPE_CHECKING:
    from types import TracebackType

    import httpx

    from .models import (
        CalendarEntry,
        Config,
        ConfigCheckResult,
        Credentials,
        Event,
        HistoryPoint,
        LogbookEntry,
        SimpleMessage,
        State,
        StateUpdateRequest,
        TemplateRequest,
    )

_LOGGER = logging.getLogger(__name__)


class HomeAssistantClient:
    """Typed client for the Home Assistant REST API.

    Every endpoint method accepts ``base_url`` and ``token`` keyword
    arguments overriding the client's own credentials for that call.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        session: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        use_env: bool = False,
        env_file: str | PathLike[str] | None = None,
        wire_compat: bool = True,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the instance, e.g. ``http://localhost:8123``.
            token: Long-lived access token.
            session: HTTP client to use. Created on first request if omitted.
            timeout: Per-request timeout of a session created by the client.
            use_env: Fall back to ``HA_URL`` / ``HA_TOKEN`` for missing values.
            env_file: Dotenv file read by the environment fallback.
            wire_compat: Keep the request shapes of earlier releases for the
                error log and for an unfiltered logbook.

        """
        self._resolver = CredentialResolver(
            base_url, token, use_env=use_env, env_file=env_file
        )
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout
        self.wire_compat = wire_compat

    @classmethod
    def from_env(
        cls,
        env_file: str | PathLike[str] | None = None,
        **kwargs: Any,
    ) -> HomeAssistantClient:
        """Create a client falling back to ``HA_URL`` and ``HA_TOKEN``.

        The environment and dotenv file are read here, not on the first call.
        """
        client = cls(use_env=True, env_file=env_file, **kwargs)
        client._resolver.load_fallback()  # noqa: SLF001
        return client

    async def __aenter__(self) -> HomeAssistantClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.async_close()

    @property
    def session(self) -> httpx.AsyncClient:
        """Return the HTTP session, creating it on first use."""
        if self._session is None:
            _LOGGER.debug("Creating HTTP session (timeout %.1fs)", self._timeout)
            self._session = api.create_session_client(self._timeout)
        return self._session

    async def async_close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._owns_session and self._session is not None:
            await self._session.aclose()
            self._session = None

    def resolve_credentials(
        self,
        base_url: str | None = None,
        token: str | None = None,
    ) -> Credentials:
        """Return the credentials a call with these overrides would use."""
        return self._resolver.resolve(base_url, token)

    async def _async_get(
        self,
        path: str,
        base_url: str | None,
        token: str | None,
    ) -> httpx.Response:
        credentials = self._resolver.resolve(base_url, token)
        return await api.async_get(
            self.session, credentials.base_url, credentials.token, path
        )

    async def _async_post(
        self,
        path: str,
        body: Any,
        base_url: str | None,
        token: str | None,
    ) -> httpx.Response:
        credentials = self._resolver.resolve(base_url, token)
        return await api.async_post(
            self.session, credentials.base_url, credentials.token, path, body
        )

    async def async_get_config(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> Config:
        """Fetch the core configuration.

        Raises:
            MissingCredentialError: If no base URL or token is available.
            HomeAssistantHttpError: If the status is not 2xx.
            HomeAssistantDecodeError: If the body is not a configuration.
            HomeAssistantTransportError: If the request fails.

        """
        response = await self._async_get(PATH_CONFIG, base_url, token)
        return api.decode_response(
            response, schemas.CONFIG_SCHEMA, api.extract_config, StatusPolicy.CHECKED
        )

    async def async_get_events(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> list[Event]:
        """List event types and their listener counts."""
        response = await self._async_get(PATH_EVENTS, base_url, token)
        return api.decode_response(
            response, schemas.EVENTS_SCHEMA, api.extract_events, StatusPolicy.CHECKED
        )

    async def async_get_services(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> list[Any]:
        """List services per domain as raw JSON objects."""
        response = await self._async_get(PATH_SERVICES, base_url, token)
        return api.validate_response(
            response, schemas.SERVICES_SCHEMA, StatusPolicy.CHECKED
        )

    async def async_get_history(
        self,
        entity_id: str | None = None,
        *,
        minimal_response: bool = False,
        no_attributes: bool = False,
        significant_changes_only: bool = False,
        base_url: str | None = None,
        token: str | None = None,
    ) -> list[HistoryPoint]:
        """Fetch the state history of the past day.

        Home Assistant answers with one list per entity; the lists are
        concatenated in the order received.

        Args:
            entity_id: Entity, or comma separated entities, to filter on.
            minimal_response: Only return ``state`` and ``last_changed`` for
                all but the first and last point.
            no_attributes: Skip attributes.
            significant_changes_only: Only return significant state changes.
            base_url: Base URL override for this call.
            token: Token override for this call.

        Returns:
            Flattened list of history points.

        """
        path = api.history_path(
            entity_id,
            minimal_response=minimal_response,
            no_attributes=no_attributes,
            significant_changes_only=significant_changes_only,
        )
        response = await self._async_get(path, base_url, token)
        points = api.decode_response(
            response, schemas.HISTORY_SCHEMA, api.extract_history, StatusPolicy.CHECKED
        )
        _LOGGER.debug("Retrieved %d history points", len(points))
        return points

    async def async_get_logbook(
        self,
        entity_id: str | None = None,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> list[LogbookEntry]:
        """Fetch logbook entries, optionally for a single entity."""
        path = api.logbook_path(entity_id, wire_compat=self.wire_compat)
        response = await self._async_get(path, base_url, token)
        return api.decode_response(
            response, schemas.LOGBOOK_SCHEMA, api.extract_logbook, StatusPolicy.CHECKED
        )

    async def async_get_states(
        self,
        entity_id: str | None = None,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> list[State]:
        """Fetch entity states.

        The result is always a list: every entity when ``entity_id`` is
        omitted, otherwise a single element holding that entity's state.
        """
        if not entity_id:
            response = await self._async_get(PATH_STATES, base_url, token)
            return api.decode_response(
                response,
                schemas.STATES_SCHEMA,
                api.extract_states,
                StatusPolicy.CHECKED,
            )

        response = await self._async_get(api.state_path(entity_id), base_url, token)
        state = api.decode_response(
            response, schemas.STATE_SCHEMA, api.extract_state, StatusPolicy.CHECKED
        )
        return [state]

    async def async_get_error_log(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> str:
        """Return the error log as plain text. The status is not checked."""
        path = api.error_log_path(wire_compat=self.wire_compat)
        response = await self._async_get(path, base_url, token)
        return api.read_text(response, StatusPolicy.UNCHECKED)

    async def async_get_camera_proxy(
        self,
        entity_id: str,
        time: int,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> bytes:
        """Return the camera image at ``time`` (unix seconds) as raw bytes.

        The status is not checked.
        """
        path = api.camera_proxy_path(entity_id, time)
        response = await self._async_get(path, base_url, token)
        return api.read_bytes(response, StatusPolicy.UNCHECKED)

    async def async_get_calendars(
        self,
        *,
        base_url: str | None = None,  # noqa: ARG002
        token: str | None = None,  # noqa: ARG002
    ) -> list[CalendarEntry]:
        """List calendar entities.

        Raises:
            HomeAssistantNotSupportedError: Always, before any request is made.

        """
        raise api.HomeAssistantNotSupportedError("calendars")

    async def async_set_state(
        self,
        entity_id: str,
        request: StateUpdateRequest,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> State:
        """Create or update the state of an entity."""
        response = await self._async_post(
            api.state_path(entity_id), request.as_payload(), base_url, token
        )
        return api.decode_response(
            response, schemas.STATE_SCHEMA, api.extract_state, StatusPolicy.CHECKED
        )

    async def async_fire_event(
        self,
        event_type: str,
        event_data: Any = None,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> SimpleMessage:
        """Fire an event. ``event_data`` may be omitted or empty."""
        response = await self._async_post(
            api.event_path(event_type), event_data, base_url, token
        )
        return api.decode_response(
            response,
            schemas.SIMPLE_MESSAGE_SCHEMA,
            api.extract_simple_message,
            StatusPolicy.CHECKED,
        )

    async def async_call_service(
        self,
        domain: str,
        service: str,
        service_data: Any = None,
        *,
        return_response: bool = False,
        base_url: str | None = None,
        token: str | None = None,
    ) -> Any:
        """Call a service and return the decoded JSON answer as is.

        Args:
            domain: Service domain, e.g. ``light``.
            service: Service name, e.g. ``turn_on``.
            service_data: Service data, e.g. ``{"entity_id": "light.kitchen"}``.
            return_response: Ask for the service response in the answer.
            base_url: Base URL override for this call.
            token: Token override for this call.

        Returns:
            Changed states, or changed states and the service response when
            ``return_response`` is set.

        """
        path = api.service_path(domain, service, return_response=return_response)
        _LOGGER.debug("Calling service %s.%s", domain, service)
        response = await self._async_post(path, service_data, base_url, token)
        return api.validate_response(
            response, schemas.JSON_SCHEMA, StatusPolicy.CHECKED
        )

    async def async_render_template(
        self,
        request: TemplateRequest,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> str:
        """Render a template. The status is not checked."""
        response = await self._async_post(
            PATH_TEMPLATE, request.as_payload(), base_url, token
        )
        return api.read_text(response, StatusPolicy.UNCHECKED)

    async def async_check_config(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> ConfigCheckResult:
        """Ask Home Assistant to validate ``configuration.yaml``."""
        response = await self._async_post(PATH_CHECK_CONFIG, {}, base_url, token)
        return api.decode_response(
            response,
            schemas.CONFIG_CHECK_SCHEMA,
            api.extract_config_check,
            StatusPolicy.CHECKED,
        )

    async def async_handle_intent(
        self,
        intent: Any,
        *,
        base_url: str | None = None,
        token: str | None = None,
    ) -> str:
        """Handle an intent and return the raw answer. The status is not checked."""
        response = await self._async_post(PATH_INTENT, intent, base_url, token)
        return api.read_text(response, StatusPolicy.UNCHECKED)
