"""Pydantic models for the skill wire protocol."""

from .protocol import MAX_REQUEST_AGE, PROTOCOL_VERSION, TIMESTAMP_FORMAT, RequestType
from .skill import (
    SkillRequestEnvelope,
    SkillResponse,
    SkillResponseBody,
    SkillSlot,
    SlotNotFoundError,
)

__all__ = [
    "SkillRequestEnvelope",
    "SkillResponse",
    "SkillResponseBody",
    "SkillSlot",
    "SlotNotFoundError",
    "RequestType",
    "PROTOCOL_VERSION",
    "TIMESTAMP_FORMAT",
    "MAX_REQUEST_AGE",
]
