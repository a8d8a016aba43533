"""Fixed constants of the skill wire protocol."""

from datetime import timedelta
from enum import Enum

PROTOCOL_VERSION = "1.0"

# Inbound timestamps are UTC with second precision and a literal "Z" suffix
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Requests older than this are rejected as possible replays
MAX_REQUEST_AGE = timedelta(seconds=150)


class RequestType(str, Enum):
    """Inbound request types."""

    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SESSION_ENDED = "SessionEndedRequest"
