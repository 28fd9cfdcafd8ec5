"""Constants for the Home Assistant REST API client.

This module contains the endpoint paths, environment variable names and
transport defaults used throughout the client.
"""

VERSION = "0.1.0"

USER_AGENT = f"ha-rest-api/{VERSION}"

ENV_URL = "HA_URL"
ENV_TOKEN = "HA_TOKEN"

DEFAULT_TIMEOUT = 10.0  # Seconds, per request

PATH_CONFIG = "/api/config"
PATH_EVENTS = "/api/events"
PATH_SERVICES = "/api/services"
PATH_HISTORY = "/api/history/period"
PATH_LOGBOOK = "/api/logbook"
PATH_STATES = "/api/states"
PATH_ERROR_LOG = "/api/error_log"
PATH_CAMERA_PROXY = "/api/camera_proxy"
PATH_TEMPLATE = "/api/template"
PATH_CHECK_CONFIG = "/api/config/core/check_config"
PATH_INTENT = "/api/intent/handle"

HISTORY_FLAG_MINIMAL_RESPONSE = "minimal_response"
HISTORY_FLAG_NO_ATTRIBUTES = "no_attributes"
HISTORY_FLAG_SIGNIFICANT_CHANGES_ONLY = "significant_changes_only"
SERVICE_FLAG_RETURN_RESPONSE = "return_response"
