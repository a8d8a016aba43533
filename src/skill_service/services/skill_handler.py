"""Skill request handling."""

import logging

from ..config import settings
from ..models.protocol import RequestType
from ..models.skill import SkillRequestEnvelope, SlotNotFoundError
from .response_builder import ResponseBuilder, log_directives, new_response

logger = logging.getLogger(__name__)

STREAM_TOKEN = "live-stream"

HELP_SPEECH = (
    "You can say: play the stream, or: repeat after me, followed by a phrase. "
    "Say stop to end playback."
)


def _start_turn(envelope: SkillRequestEnvelope, should_end: bool = True) -> ResponseBuilder:
    """Create a builder carrying the session turn counter forward."""
    turns = envelope.session_attributes().get("turns", 0)
    if not isinstance(turns, int) or isinstance(turns, bool):
        turns = 0

    return new_response(should_end_session=should_end, observer=log_directives).session_attribute(
        "turns", turns + 1
    )


def handle_skill_request(envelope: SkillRequestEnvelope) -> ResponseBuilder:
    """
    Process a skill request and return the response builder.

    Supported requests:
    - LaunchRequest: Welcome message
    - EchoIntent: Repeat the phrase slot back
    - PlayStreamIntent / AMAZON.ResumeIntent: Start the configured audio stream
    - AMAZON.PauseIntent / AMAZON.StopIntent: Stop playback
    - AMAZON.CancelIntent: Clear the playback queue and exit
    - AMAZON.HelpIntent: Usage instructions
    - AccountIntent: Account details, or a link-account card
    - SessionEndedRequest: Empty response

    Args:
        envelope: Parsed skill request envelope

    Returns:
        Builder holding the skill response
    """
    request_type = envelope.request_type()

    logger.info(f"Skill request type: {request_type}")

    if request_type == RequestType.LAUNCH.value:
        return (
            _start_turn(envelope, should_end=False)
            .output_speech(f"Welcome to {settings.skill_name}. {HELP_SPEECH}")
            .reprompt("What would you like to do?")
        )

    if request_type == RequestType.SESSION_ENDED.value:
        logger.info(f"Session {envelope.session_id()} ended: {envelope.request.reason}")
        return new_response()

    if request_type != RequestType.INTENT.value:
        return _start_turn(envelope, should_end=False).output_speech(
            "I'm not sure how to help with that. Say help to hear what I can do."
        )

    intent_name = envelope.intent_name()

    logger.info(f"Skill intent: {intent_name}")

    if intent_name == "EchoIntent":
        return _handle_echo(envelope)

    if intent_name in ["PlayStreamIntent", "AMAZON.ResumeIntent"]:
        return _handle_play(envelope)

    if intent_name in ["AMAZON.PauseIntent", "AMAZON.StopIntent"]:
        return _start_turn(envelope).audio_player_stop()

    if intent_name == "AMAZON.CancelIntent":
        return _start_turn(envelope).audio_player_clear_queue().output_speech("Goodbye!")

    if intent_name == "AMAZON.HelpIntent":
        return _start_turn(envelope, should_end=False).output_speech(HELP_SPEECH).reprompt(HELP_SPEECH)

    if intent_name == "AccountIntent":
        return _handle_account(envelope)

    # Fallback
    return _start_turn(envelope, should_end=False).output_speech(
        "I didn't understand that. Say help to hear what I can do."
    )


def _handle_echo(envelope: SkillRequestEnvelope) -> ResponseBuilder:
    """Handle EchoIntent - repeat the phrase slot."""
    try:
        phrase = envelope.slot_value("phrase")
    except SlotNotFoundError:
        phrase = ""

    if not phrase:
        return (
            _start_turn(envelope, should_end=False)
            .output_speech("I didn't catch that. What should I repeat?")
            .reprompt("Say: repeat after me, followed by a phrase.")
        )

    return _start_turn(envelope).output_speech(phrase).simple_card(settings.skill_name, phrase)


def _handle_play(envelope: SkillRequestEnvelope) -> ResponseBuilder:
    """Handle PlayStreamIntent - start the configured stream."""
    if not settings.stream_url:
        logger.warning("Play requested but SKILL_STREAM_URL is not configured")
        return _start_turn(envelope).output_speech("Sorry, there is no stream to play right now.")

    return (
        _start_turn(envelope)
        .output_speech(f"Playing {settings.skill_name}.")
        .audio_player_play(settings.stream_url, STREAM_TOKEN)
    )


def _handle_account(envelope: SkillRequestEnvelope) -> ResponseBuilder:
    """Handle AccountIntent - ask for account linking when no token is present."""
    if not envelope.access_token():
        return (
            _start_turn(envelope)
            .output_speech("Please link your account in the companion app.")
            .link_account_card()
        )

    return (
        _start_turn(envelope)
        .output_speech("Your account is linked.")
        .standard_card("Account", f"Linked user: {envelope.user_id()}")
    )
