# rairserver

The game-world core of a multi-user dungeon server, as a plain Python library
with no third-party dependencies.

## What it provides

- `rairserver.world` – map, layer, player and NPC data (`MapComponent`,
  `MapLayer`, `MapObject`, `PcComponent`, `NpcComponent`, `StatComponent`),
  plus `tile_is_walkable(m, x, y)` and `is_visible(...)`. A map's walls and
  opaque-decoration layers are reached with `MapComponent.walls()` and
  `MapComponent.opaque()`.
- `rairserver.a_star` – `a_star_path(m, start, goal)` searches over walkable
  tiles and returns a "came from" dictionary; follow it back from `goal` to
  read the path (`goal` is absent when it cannot be reached). `heuristic`
  (Manhattan distance) and `get_neighbours` (walkable tiles in the 3x3 block
  around a location) are exposed as well.
- `rairserver.fov` – `compute_fov_restrictive_shadowcasting(m, player_loc,
  light_walls)` returns a player's field of view as a flat list of 81
  booleans (a 9x9 square centred on the player); `format_fov` renders it as
  rows of `1` and `0`, and `log_fov` writes those rows to the module's logger
  at debug level.
- `rairserver.censor_sensor` – `CensorSensor` checks and cleans phrases
  against a tiered word dictionary: `is_profane` and `clean_profanity` work on
  whole space-separated words, `is_profane_ish` and `clean_profanity_ish` on
  substrings. `CensorSensor.from_file` reads a JSON object of word to tier;
  tiers are named by `ProfanityType` and switched with `enable_tier` and
  `disable_tier`.
- `rairserver.random_helper` – `RandomHelper(seed)`, a seedable source of
  uniform integers, floats, 64-bit values and one-in-x rolls.
- `rairserver.spawning` – `create_npc`, `remove_dead_npcs` and
  `fill_spawners`, driven by `SpawnerScript`, `SpawnerNpcId` and `RandomStat`
  definitions. `create_npc` raises `SpawnError` when a template has no
  sprites, lacks a stat, or its spawner has no walkable tile in range.
- `rairserver.queue_messages` – the messages passed into the game loop
  (`PlayerEnterMessage`, `PlayerLeaveMessage`, `PlayerMoveMessage`, all
  `QueueMessage`s) and out of it (`OutwardMessage`, `ErrorResponse`).
- `rairserver.game_queue_handlers` – handlers that apply those messages to a
  collection of maps and put error replies on any queue with a `put` method;
  `build_router()` maps message types to handlers and `dispatch(...)` runs
  the right one.

## Example

```python
from rairserver.censor_sensor import CensorSensor

sensor = CensorSensor({"darn": 1})
sensor.is_profane("well darn it")           # True
sensor.clean_profanity_ish("darnation")     # "****ation"
```

```python
import queue

from rairserver.game_queue_handlers import build_router, dispatch
from rairserver.queue_messages import PlayerEnterMessage
from rairserver.world import MapComponent

maps = [MapComponent(name="Tutorial", width=20, height=20)]
outward = queue.Queue()
dispatch(build_router(), PlayerEnterMessage(1, character_name="Hero",
         map_name="Tutorial", x=14, y=14), maps, outward)
maps[0].players[0].loc                      # (14, 14)
```

## What it does not do

This package is the game logic only. It has no command to start, no network
server or client connections, no tick loop, no account or character storage,
no map-file loading, and no logging setup: it logs through the standard
`logging` module and leaves handlers and levels to the application that uses
it.

## Running the tests

```
pip install -e .[test]
pytest
```