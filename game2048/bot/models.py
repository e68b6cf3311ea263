"""Chat platform interaction payloads.

Only the fields the bot reads or writes are modelled; anything else the
platform sends is kept as extra data.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2


class ButtonStyle(IntEnum):
    PRIMARY = 1
    SECONDARY = 2
    SUCCESS = 3


class MessageFlags(IntEnum):
    EPHEMERAL = 1 << 6


class PayloadModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class User(PayloadModel):
    id: str


class Member(PayloadModel):
    user: User


class Emoji(PayloadModel):
    name: str
    id: str | None = None


class Button(PayloadModel):
    type: ComponentType = ComponentType.BUTTON
    style: ButtonStyle = ButtonStyle.PRIMARY
    label: str | None = None
    emoji: Emoji | None = None
    custom_id: str | None = None
    disabled: bool = False


class ActionRow(PayloadModel):
    type: ComponentType = ComponentType.ACTION_ROW
    components: list[Button] = Field(default_factory=list)


class MessageInteraction(PayloadModel):
    """Summary of the interaction that created a message."""

    id: str | None = None
    name: str | None = None
    user: User


class Message(PayloadModel):
    id: str | None = None
    content: str = ""
    components: list[ActionRow] = Field(default_factory=list)
    interaction: MessageInteraction | None = None


class CommandOption(PayloadModel):
    name: str
    value: Any = None


class CommandData(PayloadModel):
    name: str
    options: list[CommandOption] = Field(default_factory=list)

    def option(self, name: str) -> Any:
        """Value of the named option, or None when it was not given."""
        for opt in self.options:
            if opt.name == name:
                return opt.value
        return None


class ComponentData(PayloadModel):
    custom_id: str
    component_type: ComponentType


class Interaction(PayloadModel):
    """An inbound interaction, already authenticated by the transport layer."""

    id: str | None = None
    type: InteractionType
    data: dict[str, Any] | None = None
    message: Message | None = None
    member: Member | None = None
    user: User | None = None

    def author_id(self) -> str | None:
        """Id of the user who triggered the interaction, in a guild or a DM."""
        if self.member is not None:
            return self.member.user.id
        if self.user is not None:
            return self.user.id
        return None


class InteractionResponseData(PayloadModel):
    content: str | None = None
    components: list[ActionRow] | None = None
    flags: int | None = None


class InteractionResponse(PayloadModel):
    type: InteractionResponseType
    data: InteractionResponseData | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready payload, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)
