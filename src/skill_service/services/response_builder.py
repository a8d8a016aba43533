"""Fluent builder for skill responses."""

import logging
from typing import Any, Callable

from pydantic_core import PydanticSerializationError

from ..models.skill import (
    AudioItem,
    AudioPlayerClearQueueDirective,
    AudioPlayerPlayDirective,
    AudioPlayerStopDirective,
    AudioStream,
    CardImage,
    LinkAccountCard,
    PlainTextSpeech,
    Reprompt,
    SimpleCard,
    SkillResponse,
    SkillResponseBody,
    SsmlSpeech,
    StandardCard,
)

logger = logging.getLogger(__name__)

ResponseObserver = Callable[["ResponseBuilder"], None]


class ResponseBuilder:
    """
    Build a skill response through chained calls.

    Every setter mutates the same underlying response and returns the builder,
    so calls can be chained:

        builder = ResponseBuilder().output_speech("Hi").reprompt("Still there?")
        payload = builder.serialize()

    Speech, card and reprompt setters overwrite any earlier value. Audio
    directive setters replace the whole directive list.
    """

    def __init__(
        self,
        should_end_session: bool = True,
        observer: ResponseObserver | None = None,
    ) -> None:
        self._response = SkillResponse(
            response=SkillResponseBody(shouldEndSession=should_end_session),
        )
        self._observer = observer

    def output_speech(self, text: str) -> "ResponseBuilder":
        self._response.response.outputSpeech = PlainTextSpeech(text=text)
        return self

    def output_speech_ssml(self, text: str) -> "ResponseBuilder":
        self._response.response.outputSpeech = SsmlSpeech(ssml=text)
        return self

    def card(self, title: str, content: str) -> "ResponseBuilder":
        return self.simple_card(title, content)

    def simple_card(self, title: str, content: str) -> "ResponseBuilder":
        self._response.response.card = SimpleCard(title=title, content=content)
        return self

    def standard_card(
        self,
        title: str,
        content: str,
        small_image_url: str = "",
        large_image_url: str = "",
    ) -> "ResponseBuilder":
        """
        Set a standard card.

        An empty image URL leaves that image field out of the card; with both
        URLs empty the image object is omitted entirely.
        """
        image = None
        if small_image_url or large_image_url:
            image = CardImage(
                smallImageUrl=small_image_url or None,
                largeImageUrl=large_image_url or None,
            )

        self._response.response.card = StandardCard(title=title, content=content, image=image)
        return self

    def link_account_card(self) -> "ResponseBuilder":
        self._response.response.card = LinkAccountCard()
        return self

    def reprompt(self, text: str) -> "ResponseBuilder":
        self._response.response.reprompt = Reprompt(outputSpeech=PlainTextSpeech(text=text))
        return self

    def reprompt_ssml(self, text: str) -> "ResponseBuilder":
        self._response.response.reprompt = Reprompt(outputSpeech=SsmlSpeech(ssml=text))
        return self

    def audio_player_play(self, url: str, token: str) -> "ResponseBuilder":
        """Replace all directives with a Play directive starting at offset 0."""
        directive = AudioPlayerPlayDirective(
            audioItem=AudioItem(stream=AudioStream(token=token, url=url, offsetInMilliseconds=0)),
        )
        self._response.response.directives = [directive]
        self._notify()
        return self

    def audio_player_stop(self, url: str = "", token: str = "") -> "ResponseBuilder":
        """Replace all directives with a Stop directive. url and token are not sent."""
        self._response.response.directives = [AudioPlayerStopDirective()]
        self._notify()
        return self

    def audio_player_clear_queue(self, url: str = "", token: str = "") -> "ResponseBuilder":
        """Replace all directives with a ClearQueue directive. url and token are not sent."""
        self._response.response.directives = [AudioPlayerClearQueueDirective()]
        self._notify()
        return self

    def end_session(self, flag: bool) -> "ResponseBuilder":
        self._response.response.shouldEndSession = flag
        return self

    def session_attributes(self, attributes: dict[str, Any]) -> "ResponseBuilder":
        """Replace the attributes carried forward to the next turn."""
        self._response.sessionAttributes = dict(attributes)
        return self

    def session_attribute(self, key: str, value: Any) -> "ResponseBuilder":
        if self._response.sessionAttributes is None:
            self._response.sessionAttributes = {}
        self._response.sessionAttributes[key] = value
        return self

    def build(self) -> SkillResponse:
        return self._response

    def to_dict(self) -> dict[str, Any]:
        """Wire payload as a JSON-ready dict, unset optional fields omitted."""
        return self._response.model_dump(mode="json", exclude_none=True)

    def serialize(self) -> str:
        """
        Encode the response as JSON.

        Unset optional fields are omitted rather than sent as null. Encoding
        errors from pydantic propagate to the caller unchanged.
        """
        return self._response.model_dump_json(exclude_none=True)

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer(self)


def new_response(
    should_end_session: bool = True,
    observer: ResponseObserver | None = None,
) -> ResponseBuilder:
    """Create an empty response builder."""
    return ResponseBuilder(should_end_session=should_end_session, observer=observer)


def log_directives(builder: ResponseBuilder) -> None:
    """
    Observer that writes the response to the debug log after a directive change.

    Nothing is serialized unless DEBUG logging is enabled, and an encoding
    failure is logged instead of raised so the builder call is unaffected.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    try:
        payload = builder.serialize()
    except PydanticSerializationError as e:
        logger.debug(f"Audio directive set; response not serializable yet: {e}")
        return
    logger.debug(f"Audio directive set: {payload}")
