"""Handlers the game loop runs for each queued message."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol

from rairserver.queue_messages import (
    ErrorResponse,
    OutwardMessage,
    PlayerEnterMessage,
    PlayerLeaveMessage,
    PlayerMoveMessage,
    QueueMessage,
)
from rairserver.world import MapComponent, PcComponent, tile_is_walkable

logger = logging.getLogger(__name__)

ALREADY_PLAYING = "already playing that character"
WRONG_COORDINATES = "Wrong coordinates"


class OutwardQueue(Protocol):
    def put(self, item: OutwardMessage) -> None: ...


Handler = Callable[[QueueMessage, Iterable[MapComponent], OutwardQueue], None]


def _send_error(outward_queue: OutwardQueue, conn_id: int, text: str) -> None:
    outward_queue.put(OutwardMessage(conn_id, ErrorResponse(text, text, text, True)))


def _expect(msg: QueueMessage, cls: type) -> None:
    if not isinstance(msg, cls):
        raise TypeError(f"expected {cls.__name__}, got {type(msg).__name__}")


def handle_player_enter_message(
    msg: QueueMessage, maps: Iterable[MapComponent], outward_queue: OutwardQueue
) -> None:
    """Place a character on its map, unless it is already playing or off the map."""
    _expect(msg, PlayerEnterMessage)
    maps = list(maps)
    logger.debug("%s %s %s", msg.map_name, msg.x, msg.y)

    if any(pc.name == msg.character_name for m in maps for pc in m.players):
        logger.warning("character already in game %s %s", msg.character_name, msg.connection_id)
        _send_error(outward_queue, msg.connection_id, ALREADY_PLAYING)
        return

    for m in maps:
        if m.name != msg.map_name:
            continue
        if msg.x >= m.width or msg.y >= m.height:
            logger.error("wrong coordinates %s %s %s %s", msg.map_name, msg.x, msg.y, msg.connection_id)
            _send_error(outward_queue, msg.connection_id, WRONG_COORDINATES)
            return
        pc = PcComponent(
            name=msg.character_name,
            level=msg.level,
            gold=msg.gold,
            loc=(msg.x, msg.y),
            connection_id=msg.connection_id,
            gender=msg.gender,
            allegiance=msg.allegiance,
            character_class=msg.baseclass,
            stats={stat.name: stat.value for stat in msg.player_stats},
        )
        m.players.append(pc)
        logger.info("character %s entered game %s", pc.name, msg.connection_id)
        return


def handle_player_leave_message(
    msg: QueueMessage, maps: Iterable[MapComponent], outward_queue: OutwardQueue
) -> None:
    """Remove the connection's characters from every map."""
    _expect(msg, PlayerLeaveMessage)
    for m in maps:
        for pc in m.players:
            if pc.connection_id == msg.connection_id:
                logger.info("character %s left game %s", pc.name, pc.connection_id)
        m.players[:] = [pc for pc in m.players if pc.connection_id != msg.connection_id]


def handle_player_move_message(
    msg: QueueMessage, maps: Iterable[MapComponent], outward_queue: OutwardQueue
) -> None:
    """Move the connection's character to a walkable tile on its map."""
    _expect(msg, PlayerMoveMessage)
    logger.debug("conn %s move to %s %s", msg.connection_id, msg.x, msg.y)

    for m in maps:
        players = [pc for pc in m.players if pc.connection_id == msg.connection_id]
        if not players:
            continue
        if msg.x >= m.width or msg.y >= m.height or not tile_is_walkable(m, msg.x, msg.y):
            logger.error("wrong coordinates %s %s %s %s", m.name, msg.x, msg.y, msg.connection_id)
            _send_error(outward_queue, msg.connection_id, WRONG_COORDINATES)
            return
        player = players[-1]
        player.loc = (msg.x, msg.y)
        logger.info("conn %s character %s moved to %s %s", msg.connection_id, player.name, msg.x, msg.y)
        return


def build_router() -> dict[int, Handler]:
    """Map each message type to its handler."""
    return {
        PlayerEnterMessage.TYPE: handle_player_enter_message,
        PlayerLeaveMessage.TYPE: handle_player_leave_message,
        PlayerMoveMessage.TYPE: handle_player_move_message,
    }


def dispatch(
    router: dict[int, Handler],
    msg: QueueMessage,
    maps: Iterable[MapComponent],
    outward_queue: OutwardQueue,
) -> None:
    """Run the handler for ``msg``; raises KeyError for an unknown type."""
    logger.debug("got game loop msg with type %s", msg.type)
    try:
        handler = router[msg.type]
    except KeyError:
        raise KeyError(f"no handler for message type {msg.type}") from None
    handler(msg, maps, outward_queue)