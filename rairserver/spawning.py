"""Creating, culling and replenishing the NPCs that spawners put on a map."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from rairserver.random_helper import RandomHelper
from rairserver.world import (
    Location,
    MapComponent,
    NpcComponent,
    StatComponent,
    tile_is_walkable,
)

logger = logging.getLogger(__name__)

STAT_HP = "hp"

_npc_ids = itertools.count()
_default_rng = RandomHelper()


class SpawnError(ValueError):
    """Raised when an NPC cannot be created from its spawner definition."""


@dataclass
class RandomStat:
    """A stat whose value is drawn from ``[min, max]`` at spawn time."""

    name: str
    min: int
    max: int


@dataclass
class SpawnerNpcId:
    """The template a spawner uses to create one kind of NPC."""

    npc_id: str
    sprite: list[int] = field(default_factory=list)
    allegiance: str = ""
    alignment: str = ""
    gender: str = ""
    dir: str = ""
    hostility: str = ""
    character_class: str = ""
    monster_class: str = ""
    spawn_message: str = ""
    sfx: str = ""
    level: int = 0
    skill_on_kill: str = ""
    sfx_max_chance: int = 0
    random_stats: list[RandomStat] = field(default_factory=list)
    stats: list[StatComponent] = field(default_factory=list)


@dataclass(eq=False)
class SpawnerScript:
    """A spawner placed on a map, keeping up to ``max_creatures`` NPCs alive."""

    id: int
    loc: Location = (0, 0)
    spawn_radius: int = 0
    max_creatures: int = 0
    npc_ids: list[SpawnerNpcId] = field(default_factory=list)


def _pick(rng: RandomHelper, items: Sequence):
    return items[rng.generate_single(0, len(items) - 1)]


def _spawn_location(m: MapComponent, script: SpawnerScript, rng: RandomHelper) -> Location:
    if script.spawn_radius <= 0:
        return script.loc
    sx, sy = script.loc
    r = script.spawn_radius
    candidates = [
        (x, y)
        for x in range(sx - r, sx + r + 1)
        for y in range(sy - r, sy + r + 1)
        if tile_is_walkable(m, x, y)
    ]
    if not candidates:
        raise SpawnError(f"spawner {script.id} has no walkable tile within radius {r}")
    return _pick(rng, candidates)


def create_npc(
    spawner_npc_id: SpawnerNpcId,
    m: MapComponent,
    script: SpawnerScript,
    stat_names: Iterable[str],
    rng: RandomHelper | None = None,
) -> NpcComponent:
    """Create an NPC from a spawner template.

    Every name in ``stat_names`` gets a value, from the random stats first and
    the fixed stats otherwise. Raises SpawnError when the template has no
    sprites, lacks a stat, or the spawner has nowhere to place the NPC.
    """
    rng = rng or _default_rng
    if not spawner_npc_id.sprite:
        raise SpawnError(f"spawner npc {spawner_npc_id.npc_id} has no sprites")

    npc = NpcComponent(
        id=next(_npc_ids),
        npc_id=spawner_npc_id.npc_id,
        allegiance=spawner_npc_id.allegiance,
        alignment=spawner_npc_id.alignment,
        gender=spawner_npc_id.gender,
        dir=spawner_npc_id.dir,
        hostility=spawner_npc_id.hostility,
        character_class=spawner_npc_id.character_class,
        monster_class=spawner_npc_id.monster_class,
        spawn_message=spawner_npc_id.spawn_message,
        sfx=spawner_npc_id.sfx,
        level=spawner_npc_id.level,
        highest_level=spawner_npc_id.level,
        skill_on_kill=spawner_npc_id.skill_on_kill,
        sfx_max_chance=spawner_npc_id.sfx_max_chance,
        spawner=script,
    )
    npc.sprite = _pick(rng, spawner_npc_id.sprite)
    npc.loc = _spawn_location(m, script, rng)

    for stat in stat_names:
        random_stat = next((rs for rs in spawner_npc_id.random_stats if rs.name == stat), None)
        if random_stat is not None:
            npc.stats[stat] = rng.generate_single(random_stat.min, random_stat.max)
            continue
        fixed = next((s for s in spawner_npc_id.stats if s.name == stat), None)
        if fixed is None:
            raise SpawnError(
                f"initializing spawn for spawner_npc_id {spawner_npc_id.npc_id} failed, missing stat {stat}"
            )
        npc.stats[stat] = fixed.value

    logger.debug("created npc %s:%s", npc.name, npc.npc_id)
    return npc


def remove_dead_npcs(npcs: list[NpcComponent]) -> None:
    """Drop, in place, every NPC whose hit points are zero or less."""
    npcs[:] = [npc for npc in npcs if npc.stats.get(STAT_HP, 0) > 0]


def fill_spawners(
    m: MapComponent,
    npcs: list[NpcComponent],
    stat_names: Iterable[str],
    rng: RandomHelper | None = None,
) -> list[NpcComponent]:
    """Add one NPC to every spawner with living NPCs below its maximum.

    The new NPCs are appended to ``npcs`` and also returned. Spawners whose
    template cannot be spawned are logged and skipped.
    """
    rng = rng or _default_rng
    stat_names = list(stat_names)
    counters: dict[int, list] = {}
    for npc in npcs:
        if npc.stats.get(STAT_HP, 0) <= 0 or npc.spawner is None:
            continue
        entry = counters.setdefault(npc.spawner.id, [0, npc.spawner])
        entry[0] += 1

    created: list[NpcComponent] = []
    for count, spawner in counters.values():
        if count >= spawner.max_creatures or not spawner.npc_ids:
            continue
        template = _pick(rng, spawner.npc_ids)
        try:
            created.append(create_npc(template, m, spawner, stat_names, rng))
        except SpawnError as exc:
            logger.error("spawner %s could not spawn: %s", spawner.id, exc)

    npcs.extend(created)
    return created