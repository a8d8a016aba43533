"""Skill webhook endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.skill import SkillRequestEnvelope
from ..services.skill_handler import handle_skill_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["skill"])


def _verify_request(envelope: SkillRequestEnvelope) -> None:
    """Reject requests for another application or with a stale timestamp."""
    if settings.application_id and not envelope.is_application_id_valid(settings.application_id):
        logger.warning(
            f"Rejected request {envelope.request.requestId}: "
            f"unexpected application id {envelope.session.application.applicationId!r}"
        )
        raise HTTPException(status_code=403, detail="Invalid application id")

    if settings.verify_timestamp and not envelope.is_timestamp_fresh():
        logger.warning(
            f"Rejected request {envelope.request.requestId}: "
            f"stale timestamp {envelope.request.timestamp!r}"
        )
        raise HTTPException(status_code=400, detail="Request timestamp is too old")


@router.post("/skill")
async def skill_webhook(envelope: SkillRequestEnvelope) -> dict[str, Any]:
    """
    Handle skill requests.

    The request is checked against the configured application id and the
    150 second freshness window before it is dispatched:
    - LaunchRequest: "Alexa, open Echo Radio"
    - EchoIntent: "Alexa, ask Echo Radio to repeat after me hello"
    - PlayStreamIntent: "Alexa, ask Echo Radio to play"
    - AMAZON.StopIntent: "Alexa, stop"

    The response is returned in skill response format.
    """
    logger.info(f"Skill request received: {envelope.request_type()} ({envelope.intent_name()})")

    _verify_request(envelope)

    builder = handle_skill_request(envelope)

    return builder.to_dict()
