"""Voluptuous schemas for Home Assistant REST API responses.

Every schema allows extra keys; the decoders decide which of them are
kept. Required keys missing from a response make validation fail, which
the client reports as a decode error for the whole call.
"""

import voluptuous as vol

NUMBER = vol.All(vol.Any(int, float), vol.Coerce(float))
OPTIONAL_STRING = vol.Any(None, str)


def strict_int(value: object) -> int:
    """Accept integers only; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid("expected int")
    return value


UINT16 = vol.All(strict_int, vol.Range(min=0, max=0xFFFF))

ATTRIBUTE_KEYS = ("friendly_name", "editable", "id", "source", "user_id", "icon")
UNIT_SYSTEM_KEYS = ("length", "mass", "temperature", "volume")

UNIT_SYSTEM_SCHEMA = vol.Schema(
    {vol.Required(key): str for key in UNIT_SYSTEM_KEYS},
    extra=vol.ALLOW_EXTRA,
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("components"): [str],
        vol.Required("config_dir"): str,
        vol.Required("elevation"): NUMBER,
        vol.Required("latitude"): NUMBER,
        vol.Required("location_name"): str,
        vol.Required("longitude"): NUMBER,
        vol.Required("time_zone"): str,
        vol.Required("unit_system"): UNIT_SYSTEM_SCHEMA,
        vol.Required("version"): str,
        vol.Required("whitelist_external_dirs"): [str],
    },
    extra=vol.ALLOW_EXTRA,
)

EVENT_SCHEMA = vol.Schema(
    {
        vol.Required("event"): str,
        vol.Required("listener_count"): UINT16,
    },
    extra=vol.ALLOW_EXTRA,
)

EVENTS_SCHEMA = vol.Schema([EVENT_SCHEMA])

SERVICES_SCHEMA = vol.Schema(list)

JSON_SCHEMA = vol.Schema(object)

ATTRIBUTES_SCHEMA = vol.Schema(
    {
        vol.Optional("friendly_name"): OPTIONAL_STRING,
        vol.Optional("editable"): vol.Any(None, bool),
        vol.Optional("id"): OPTIONAL_STRING,
        vol.Optional("source"): OPTIONAL_STRING,
        vol.Optional("user_id"): OPTIONAL_STRING,
        vol.Optional("icon"): OPTIONAL_STRING,
    },
    extra=vol.ALLOW_EXTRA,
)

CONTEXT_SCHEMA = vol.Schema(
    {
        vol.Required("id"): str,
        vol.Optional("parent_id"): OPTIONAL_STRING,
        vol.Optional("user_id"): OPTIONAL_STRING,
    },
    extra=vol.ALLOW_EXTRA,
)

HISTORY_POINT_SCHEMA = vol.Schema(
    {
        vol.Optional("entity_id"): OPTIONAL_STRING,
        vol.Required("state"): str,
        vol.Optional("attributes"): vol.Any(None, ATTRIBUTES_SCHEMA),
        vol.Required("last_changed"): str,
        vol.Optional("last_updated"): OPTIONAL_STRING,
    },
    extra=vol.ALLOW_EXTRA,
)

HISTORY_SCHEMA = vol.Schema([[HISTORY_POINT_SCHEMA]])

LOGBOOK_ENTRY_SCHEMA = vol.Schema(
    {
        vol.Required("name"): str,
        vol.Optional("message"): OPTIONAL_STRING,
        vol.Optional("source"): OPTIONAL_STRING,
        vol.Required("entity_id"): str,
        vol.Optional("context_id"): OPTIONAL_STRING,
        vol.Optional("context_user_id"): OPTIONAL_STRING,
        vol.Optional("domain"): OPTIONAL_STRING,
        vol.Required("when"): str,
    },
    extra=vol.ALLOW_EXTRA,
)

LOGBOOK_SCHEMA = vol.Schema([LOGBOOK_ENTRY_SCHEMA])

STATE_SCHEMA = vol.Schema(
    {
        vol.Optional("entity_id"): OPTIONAL_STRING,
        vol.Required("state"): str,
        vol.Optional("attributes"): vol.Any(None, ATTRIBUTES_SCHEMA),
        vol.Optional("last_changed"): OPTIONAL_STRING,
        vol.Optional("last_reported"): OPTIONAL_STRING,
        vol.Optional("last_updated"): OPTIONAL_STRING,
        vol.Optional("context"): vol.Any(None, CONTEXT_SCHEMA),
    },
    extra=vol.ALLOW_EXTRA,
)

STATES_SCHEMA = vol.Schema([STATE_SCHEMA])

SIMPLE_MESSAGE_SCHEMA = vol.Schema(
    {vol.Required("message"): str},
    extra=vol.ALLOW_EXTRA,
)

CONFIG_CHECK_SCHEMA = vol.Schema(
    {
        vol.Required("result"): str,
        vol.Optional("errors"): OPTIONAL_STRING,
        vol.Optional("warnings"): OPTIONAL_STRING,
    },
    extra=vol.ALLOW_EXTRA,
)
