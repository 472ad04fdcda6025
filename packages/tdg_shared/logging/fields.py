"""Canonical logging field names for tdg packages.

Keeping names centralized keeps the gateway, CLI, and formatters emitting the
same structured keys.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Outbound request fields.
METHOD = "method"
URL = "url"
STATUS_CODE = "status_code"
FAILURE_KIND = "failure_kind"
ERROR = "error"
FILENAME = "filename"

GATEWAY_FAILURE_EVENT = "gateway_failure"
OBSERVER_FAILURE_EVENT = "gateway_observer_failure"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
