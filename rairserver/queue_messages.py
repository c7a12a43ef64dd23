"""Messages passed to the game loop and the replies it sends out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from rairserver.world import StatComponent


def _check_coordinates(x: int, y: int) -> None:
    if x < 0 or y < 0:
        raise ValueError(f"coordinates must not be negative, got {x} {y}")


@dataclass
class QueueMessage:
    """A message for the game loop, tied to one client connection."""

    connection_id: int
    TYPE: ClassVar[int] = 0

    @property
    def type(self) -> int:
        """The message's routing type."""
        return self.TYPE


@dataclass
class PlayerEnterMessage(QueueMessage):
    """A character enters the game on a map."""

    character_name: str = ""
    gender: str = ""
    allegiance: str = ""
    baseclass: str = ""
    map_name: str = ""
    player_stats: list[StatComponent] = field(default_factory=list)
    level: int = 0
    gold: int = 0
    x: int = 0
    y: int = 0
    TYPE: ClassVar[int] = 1

    def __post_init__(self) -> None:
        _check_coordinates(self.x, self.y)


@dataclass
class PlayerLeaveMessage(QueueMessage):
    """A connection's character leaves the game."""

    TYPE: ClassVar[int] = 2


@dataclass
class PlayerMoveMessage(QueueMessage):
    """A connection's character moves to a tile."""

    x: int = 0
    y: int = 0
    TYPE: ClassVar[int] = 3

    def __post_init__(self) -> None:
        _check_coordinates(self.x, self.y)


@dataclass(frozen=True)
class ErrorResponse:
    """An error reported back to a client."""

    error: str
    pretty_error_name: str = ""
    pretty_error_description: str = ""
    clear_login: bool = False


@dataclass
class OutwardMessage:
    """A reply queued for delivery to one connection."""

    conn_id: int
    msg: Any