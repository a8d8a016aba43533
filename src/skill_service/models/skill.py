"""Skill request/response models."""

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .protocol import MAX_REQUEST_AGE, PROTOCOL_VERSION, TIMESTAMP_FORMAT, RequestType

_TIMESTAMP_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z")


class SlotNotFoundError(LookupError):
    """Raised when a slot is not present on the request intent."""

    def __init__(self, slot_name: str) -> None:
        super().__init__(f"Slot not found: {slot_name}")
        self.slot_name = slot_name


def parse_timestamp(value: str) -> datetime:
    """
    Parse a request timestamp in YYYY-MM-DDTHH:MM:SSZ format.

    Anything else yields the minimum UTC datetime instead of raising, so
    a malformed timestamp always reads as stale.
    """
    if not _TIMESTAMP_PATTERN.fullmatch(value):
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    return parsed.replace(tzinfo=timezone.utc)


# Inbound


class _InboundModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class SkillSlot(_InboundModel):
    """Skill slot value."""

    name: str
    value: str | None = None


class SkillIntent(_InboundModel):
    """Skill intent with slots."""

    name: str
    slots: dict[str, SkillSlot] = Field(default_factory=dict)

    @field_validator("slots", mode="before")
    @classmethod
    def _empty_slots(cls, value: Any) -> Any:
        return {} if value is None else value


class SkillApplication(_InboundModel):
    """Calling application identity."""

    applicationId: str = ""


class SkillUser(_InboundModel):
    """Skill user, with an access token when the account is linked."""

    userId: str = ""
    accessToken: str | None = None


class SkillSession(_InboundModel):
    """Skill session information."""

    new: bool = Field(default=False, validation_alias=AliasChoices("new", "isNew"))
    sessionId: str = ""
    application: SkillApplication = Field(default_factory=SkillApplication)
    attributes: dict[str, Any] = Field(default_factory=dict)
    user: SkillUser = Field(default_factory=SkillUser)

    @field_validator("attributes", mode="before")
    @classmethod
    def _empty_attributes(cls, value: Any) -> Any:
        return {} if value is None else value


class SkillRequest(_InboundModel):
    """Skill request payload."""

    type: str
    requestId: str = ""
    timestamp: str = ""
    locale: str = "en-US"
    intent: SkillIntent | None = None
    reason: str | None = None


class SkillRequestEnvelope(_InboundModel):
    """Full skill request envelope with accessors and validation predicates."""

    version: str = PROTOCOL_VERSION
    session: SkillSession = Field(default_factory=SkillSession)
    request: SkillRequest

    def is_timestamp_fresh(self, now: datetime | None = None) -> bool:
        """
        Check the request timestamp is less than 150 seconds old.

        Args:
            now: Timezone-aware reference time, defaults to the current UTC time

        Returns:
            True if the request is recent enough to be processed
        """
        if now is None:
            now = datetime.now(timezone.utc)
        return now - parse_timestamp(self.request.timestamp) < MAX_REQUEST_AGE

    def is_application_id_valid(self, expected: str) -> bool:
        """Exact, case-sensitive match against the session application id."""
        return self.session.application.applicationId == expected

    def session_id(self) -> str:
        return self.session.sessionId

    def user_id(self) -> str:
        return self.session.user.userId

    def access_token(self) -> str | None:
        return self.session.user.accessToken

    def is_new_session(self) -> bool:
        return self.session.new

    def session_attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(self.session.attributes)

    def request_type(self) -> str:
        return self.request.type

    def intent_name(self) -> str:
        """
        Return the intent name for intent requests.

        For every other request type the request type itself is returned,
        so callers cannot assume this is a real intent name.
        """
        if self.request_type() == RequestType.INTENT.value:
            return self.request.intent.name if self.request.intent else ""
        return self.request_type()

    def slot_value(self, name: str) -> str:
        """
        Look up a slot value by slot name.

        Raises:
            SlotNotFoundError: If the request carries no slot with that name
        """
        slot = self.all_slots().get(name)
        if slot is None:
            raise SlotNotFoundError(name)
        return slot.value or ""

    def all_slots(self) -> Mapping[str, SkillSlot]:
        """Read-only view of the intent slots (empty without an intent)."""
        if self.request.intent is None:
            return MappingProxyType({})
        return MappingProxyType(self.request.intent.slots)


# Outbound


class PlainTextSpeech(BaseModel):
    """Plain text speech output."""

    type: Literal["PlainText"] = "PlainText"
    text: str


class SsmlSpeech(BaseModel):
    """SSML speech output."""

    type: Literal["SSML"] = "SSML"
    ssml: str


OutputSpeech = Annotated[Union[PlainTextSpeech, SsmlSpeech], Field(discriminator="type")]


class CardImage(BaseModel):
    """Image URLs for a standard card. Unset URLs are omitted."""

    smallImageUrl: str | None = None
    largeImageUrl: str | None = None


class SimpleCard(BaseModel):
    """Card with a title and plain text content."""

    type: Literal["Simple"] = "Simple"
    title: str
    content: str


class StandardCard(BaseModel):
    """Card with a title, content and optional images."""

    type: Literal["Standard"] = "Standard"
    title: str
    content: str
    image: CardImage | None = None


class LinkAccountCard(BaseModel):
    """Card prompting the user to link their account."""

    type: Literal["LinkAccount"] = "LinkAccount"


Card = Annotated[Union[SimpleCard, StandardCard, LinkAccountCard], Field(discriminator="type")]


class Reprompt(BaseModel):
    """Speech used when the user does not answer."""

    outputSpeech: OutputSpeech


class AudioStream(BaseModel):
    """Audio stream to play."""

    token: str
    url: str
    offsetInMilliseconds: int = 0


class AudioItem(BaseModel):
    stream: AudioStream


class AudioPlayerPlayDirective(BaseModel):
    """Start streaming an audio item."""

    type: Literal["AudioPlayer.Play"] = "AudioPlayer.Play"
    playBehavior: Literal["REPLACE_ALL"] = "REPLACE_ALL"
    audioItem: AudioItem


class AudioPlayerStopDirective(BaseModel):
    """Stop the current audio stream."""

    type: Literal["AudioPlayer.Stop"] = "AudioPlayer.Stop"


class AudioPlayerClearQueueDirective(BaseModel):
    """Clear all queued audio streams."""

    type: Literal["AudioPlayer.ClearQueue"] = "AudioPlayer.ClearQueue"


Directive = Annotated[
    Union[AudioPlayerPlayDirective, AudioPlayerStopDirective, AudioPlayerClearQueueDirective],
    Field(discriminator="type"),
]


class SkillResponseBody(BaseModel):
    """Skill response body."""

    outputSpeech: OutputSpeech | None = None
    card: Card | None = None
    reprompt: Reprompt | None = None
    directives: list[Directive] | None = None
    shouldEndSession: bool = True


class SkillResponse(BaseModel):
    """Full skill response envelope."""

    version: str = PROTOCOL_VERSION
    sessionAttributes: dict[str, Any] | None = None
    response: SkillResponseBody = Field(default_factory=SkillResponseBody)
