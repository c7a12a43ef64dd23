import pytest

from rairserver.random_helper import RandomHelper
from rairserver.spawning import (
    RandomStat,
    SpawnError,
    SpawnerNpcId,
    SpawnerScript,
    create_npc,
    fill_spawners,
    remove_dead_npcs,
)
from rairserver.world import (
    OPAQUE_DECOR_LAYER,
    WALLS_LAYER,
    MapComponent,
    MapLayer,
    MapObject,
    NpcComponent,
    StatComponent,
)

STATS = ["str", "hp"]


def make_map(width=6, height=6, walls=()):
    data = [1 if (x, y) in walls else 0 for y in range(height) for x in range(width)]
    n = width * height
    return MapComponent(
        name="Test",
        width=width,
        height=height,
        layers={
            WALLS_LAYER: MapLayer(WALLS_LAYER, width, height, data, []),
            OPAQUE_DECOR_LAYER: MapLayer(OPAQUE_DECOR_LAYER, width, height, [0] * n, [MapObject()] * n),
        },
    )


def make_template(**kwargs):
    defaults = dict(
        npc_id="goblin",
        sprite=[10, 11, 12],
        allegiance="Enemy",
        gender="male",
        level=3,
        stats=[StatComponent("str", 5), StatComponent("hp", 20)],
    )
    defaults.update(kwargs)
    return SpawnerNpcId(**defaults)


def test_create_npc_copies_template_and_stats():
    m = make_map()
    script = SpawnerScript(id=1, loc=(2, 3), max_creatures=2)
    template = make_template()
    npc = create_npc(template, m, script, STATS, RandomHelper(1))
    assert npc.npc_id == "goblin"
    assert npc.allegiance == "Enemy"
    assert npc.level == 3
    assert npc.highest_level == 3
    assert npc.stats == {"str": 5, "hp": 20}
    assert npc.loc == (2, 3)
    assert npc.sprite in template.sprite
    assert npc.spawner is script


def test_create_npc_random_stat_within_bounds():
    m = make_map()
    script = SpawnerScript(id=1, loc=(1, 1))
    template = make_template(random_stats=[RandomStat("str", 7, 9)])
    rng = RandomHelper(5)
    for _ in range(20):
        npc = create_npc(template, m, script, STATS, rng)
        assert 7 <= npc.stats["str"] <= 9
        assert npc.stats["hp"] == 20


def test_create_npc_ids_increase():
    m = make_map()
    script = SpawnerScript(id=1)
    first = create_npc(make_template(), m, script, STATS, RandomHelper(2))
    second = create_npc(make_template(), m, script, STATS, RandomHelper(2))
    assert second.id > first.id


def test_create_npc_missing_stat_raises():
    m = make_map()
    with pytest.raises(SpawnError):
        create_npc(make_template(), m, SpawnerScript(id=1), ["str", "hp", "agi"], RandomHelper(0))


def test_create_npc_without_sprites_raises():
    m = make_map()
    with pytest.raises(SpawnError):
        create_npc(make_template(sprite=[]), m, SpawnerScript(id=1), STATS, RandomHelper(0))


def test_create_npc_radius_picks_only_walkable_tile():
    walls = {(x, y) for x in range(6) for y in range(6)} - {(3, 2)}
    m = make_map(walls=walls)
    script = SpawnerScript(id=1, loc=(2, 2), spawn_radius=1)
    npc = create_npc(make_template(), m, script, STATS, RandomHelper(3))
    assert npc.loc == (3, 2)


def test_create_npc_radius_stays_in_box():
    m = make_map(width=10, height=10)
    script = SpawnerScript(id=1, loc=(5, 5), spawn_radius=2)
    rng = RandomHelper(9)
    for _ in range(20):
        x, y = create_npc(make_template(), m, script, STATS, rng).loc
        assert 3 <= x <= 7 and 3 <= y <= 7


def test_create_npc_radius_without_walkable_tile_raises():
    walls = {(x, y) for x in range(6) for y in range(6)}
    m = make_map(walls=walls)
    script = SpawnerScript(id=1, loc=(2, 2), spawn_radius=1)
    with pytest.raises(SpawnError):
        create_npc(make_template(), m, script, STATS, RandomHelper(0))


def test_remove_dead_npcs_keeps_living():
    alive = NpcComponent(npc_id="a", stats={"hp": 4})
    dead = NpcComponent(npc_id="b", stats={"hp": 0})
    no_hp = NpcComponent(npc_id="c")
    npcs = [dead, alive, no_hp]
    remove_dead_npcs(npcs)
    assert npcs == [alive]


def test_fill_spawners_adds_one_below_maximum():
    m = make_map()
    script = SpawnerScript(id=7, loc=(1, 1), max_creatures=3, npc_ids=[make_template()])
    existing = NpcComponent(npc_id="goblin", stats={"hp": 5}, spawner=script)
    npcs = [existing]
    created = fill_spawners(m, npcs, STATS, RandomHelper(4))
    assert len(created) == 1
    assert npcs == [existing, created[0]]
    assert created[0].spawner is script


def test_fill_spawners_respects_maximum():
    m = make_map()
    script = SpawnerScript(id=7, max_creatures=1, npc_ids=[make_template()])
    npcs = [NpcComponent(stats={"hp": 5}, spawner=script)]
    assert fill_spawners(m, npcs, STATS, RandomHelper(4)) == []
    assert len(npcs) == 1


def test_fill_spawners_ignores_dead_and_unspawned():
    m = make_map()
    script = SpawnerScript(id=7, max_creatures=5, npc_ids=[make_template()])
    npcs = [NpcComponent(stats={"hp": 0}, spawner=script), NpcComponent(stats={"hp": 3})]
    assert fill_spawners(m, npcs, STATS, RandomHelper(4)) == []
    assert len(npcs) == 2


def test_fill_spawners_skips_failing_template():
    m = make_map()
    script = SpawnerScript(id=7, max_creatures=5, npc_ids=[make_template(sprite=[])])
    npcs = [NpcComponent(stats={"hp": 3}, spawner=script)]
    assert fill_spawners(m, npcs, STATS, RandomHelper(4)) == []
    assert len(npcs) == 1