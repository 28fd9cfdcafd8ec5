"""Data models for the Home Assistant REST API client."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """Base URL and bearer token resolved for a single call."""

    base_url: str
    token: str

    def __repr__(self) -> str:
        return f"Credentials(base_url={self.base_url!r}, token='***')"


@dataclass(slots=True)
class UnitSystem:
    """Units the instance reports values in."""

    length: str
    mass: str
    temperature: str
    volume: str
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Config:
    """Core configuration returned by `/api/config`."""

    components: list[str]
    config_dir: str
    elevation: float
    latitude: float
    location_name: str
    longitude: float
    time_zone: str
    unit_system: UnitSystem
    version: str
    whitelist_external_dirs: list[str]


@dataclass(slots=True)
class Event:
    """An event type and the number of listeners subscribed to it."""

    event: str
    listener_count: int


@dataclass(slots=True)
class Attributes:
    """Entity attributes.

    The commonly used keys are named fields; everything else the entity
    reports is kept in ``extra`` so integrations with custom attributes
    lose nothing on decode.
    """

    friendly_name: str | None = None
    editable: bool | None = None
    id: str | None = None
    source: str | None = None
    user_id: str | None = None
    icon: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Context:
    """Origin of a state change."""

    id: str
    parent_id: str | None = None
    user_id: str | None = None


@dataclass(slots=True)
class HistoryPoint:
    """A single recorded state of an entity.

    With ``minimal_response`` only the first point of each entity carries
    ``entity_id``, ``attributes`` and ``last_updated``.
    """

    state: str
    last_changed: str
    entity_id: str | None = None
    attributes: Attributes | None = None
    last_updated: str | None = None


@dataclass(slots=True)
class LogbookEntry:
    """A logbook line for an entity."""

    name: str
    entity_id: str
    when: str
    message: str | None = None
    source: str | None = None
    context_id: str | None = None
    domain: str | None = None


@dataclass(slots=True)
class State:
    """Current state of an entity."""

    state: str
    entity_id: str | None = None
    attributes: Attributes | None = None
    last_changed: str | None = None
    last_reported: str | None = None
    last_updated: str | None = None
    context: Context | None = None


@dataclass(frozen=True, slots=True)
class CalendarEntry:
    """A calendar entity. Listing calendars is not supported yet."""

    entity_id: str
    name: str


@dataclass(slots=True)
class SimpleMessage:
    """Acknowledgement message, e.g. ``Event tag_scanned fired.``."""

    message: str


@dataclass(slots=True)
class ConfigCheckResult:
    """Outcome of a configuration check."""

    result: str
    errors: str | None = None
    warnings: str | None = None

    @property
    def is_valid(self) -> bool:
        """Return True if Home Assistant reported the configuration valid."""
        return self.result == "valid"


@dataclass(slots=True)
class StateUpdateRequest:
    """Body for creating or updating an entity state."""

    state: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def as_payload(self) -> dict[str, Any]:
        """Serialize with attributes flattened next to ``state``.

        A ``state`` key inside ``attributes`` is dropped.
        """
        payload: dict[str, Any] = {"state": self.state}
        payload.update(
            (key, value) for key, value in self.attributes.items() if key != "state"
        )
        return payload


@dataclass(slots=True)
class TemplateRequest:
    """Body for rendering a template."""

    template: str

    def as_payload(self) -> dict[str, Any]:
        """Serialize as a JSON object."""
        return {"template": self.template}
