"""Skill request handling and response building."""

from .response_builder import ResponseBuilder, new_response
from .skill_handler import handle_skill_request

__all__ = [
    "ResponseBuilder",
    "new_response",
    "handle_skill_request",
]
