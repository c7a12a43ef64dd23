"""Map, layer and character components shared by the game logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

Location = tuple[int, int]

FOV_MAX_DISTANCE = 4
FOV_DIAMETER = FOV_MAX_DISTANCE * 2 + 1
FOV_SIZE = FOV_DIAMETER * FOV_DIAMETER

WALLS_LAYER = "Walls"
OPAQUE_DECOR_LAYER = "OpaqueDecor"


@dataclass
class StatComponent:
    """A named stat with its value."""

    name: str
    value: int


@dataclass(frozen=True)
class MapObject:
    """An object placed on a map tile; a gid of 0 means no object."""

    gid: int = 0
    name: str = ""


@dataclass
class MapLayer:
    """One tile layer of a map: tile data and placed objects, row by row."""

    name: str
    width: int
    height: int
    data: list[int] = field(default_factory=list)
    objects: list[MapObject] = field(default_factory=list)


@dataclass
class _Character:
    name: str = ""
    loc: Location = (0, 0)
    stats: dict[str, int] = field(default_factory=dict)
    level: int = 0
    gender: str = ""
    allegiance: str = ""
    character_class: str = ""
    dir: str = ""
    sprite: int = 0


@dataclass
class PcComponent(_Character):
    """A player character on a map."""

    gold: int = 0
    connection_id: int = 0
    fov: list[bool] = field(default_factory=lambda: [False] * FOV_SIZE)


@dataclass
class NpcComponent(_Character):
    """A non-player character on a map."""

    id: int = 0
    npc_id: str = ""
    alignment: str = ""
    hostility: str = ""
    monster_class: str = ""
    spawn_message: str = ""
    sfx: str = ""
    highest_level: int = 0
    skill_on_kill: str = ""
    sfx_max_chance: int = 0
    spawner: Any = None


@dataclass
class MapComponent:
    """A loaded map with its layers and the characters on it."""

    name: str
    width: int
    height: int
    layers: dict[str, MapLayer] = field(default_factory=dict)
    players: list[PcComponent] = field(default_factory=list)
    npcs: list[NpcComponent] = field(default_factory=list)

    def walls(self) -> MapLayer:
        """Return the walls layer; raises KeyError when the map has none."""
        return self.layers[WALLS_LAYER]

    def opaque(self) -> MapLayer:
        """Return the opaque decoration layer; raises KeyError when missing."""
        return self.layers[OPAQUE_DECOR_LAYER]


def tile_is_walkable(m: MapComponent, x: int, y: int) -> bool:
    """Return whether the tile holds neither a wall nor an opaque object."""
    walls = m.walls()
    opaque = m.opaque()
    if not (0 <= x < walls.width and 0 <= y < walls.height):
        return False
    c = x + y * walls.width
    return walls.data[c] == 0 and opaque.objects[c].gid == 0


def is_visible(
    main_entity: Location,
    other: Location,
    fov: Sequence[bool],
    min_x: int,
    max_x: int,
    min_y: int,
    max_y: int,
) -> bool:
    """Return whether ``other`` lies in the bounding box and in ``main_entity``'s field of view."""
    ox, oy = other
    mx, my = main_entity
    if not (min_x <= ox <= max_x and min_y <= oy <= max_y):
        return False
    index = mx - ox + FOV_MAX_DISTANCE + (oy - my + FOV_MAX_DISTANCE) * FOV_DIAMETER
    if not 0 <= index < len(fov):
        return False
    return bool(fov[index])