import pytest

from rairserver.world import (
    FOV_SIZE,
    OPAQUE_DECOR_LAYER,
    WALLS_LAYER,
    MapComponent,
    MapLayer,
    MapObject,
    NpcComponent,
    PcComponent,
    is_visible,
    tile_is_walkable,
)


def make_map(width, height, walls=(), objects=()):
    data = [0] * (width * height)
    objs = [MapObject()] * (width * height)
    for x, y in walls:
        data[x + y * width] = 1
    for x, y in objects:
        objs[x + y * width] = MapObject(gid=7)
    layers = {
        WALLS_LAYER: MapLayer(WALLS_LAYER, width, height, data, []),
        OPAQUE_DECOR_LAYER: MapLayer(OPAQUE_DECOR_LAYER, width, height, [], objs),
    }
    return MapComponent("test", width, height, layers)


def test_walls_and_opaque_layers_by_name():
    m = make_map(2, 2)
    assert m.walls().name == WALLS_LAYER
    assert m.opaque().name == OPAQUE_DECOR_LAYER


def test_missing_layer_raises():
    m = MapComponent("empty", 1, 1)
    with pytest.raises(KeyError):
        m.walls()


def test_open_tile_is_walkable():
    m = make_map(3, 3)
    assert tile_is_walkable(m, 1, 1) is True


def test_wall_and_object_block():
    m = make_map(3, 3, walls=[(0, 1)], objects=[(2, 2)])
    assert tile_is_walkable(m, 0, 1) is False
    assert tile_is_walkable(m, 2, 2) is False
    assert tile_is_walkable(m, 1, 0) is True


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_out_of_bounds_not_walkable(x, y):
    m = make_map(3, 3)
    assert tile_is_walkable(m, x, y) is False


def test_is_visible_full_fov_inside_box():
    fov = [True] * FOV_SIZE
    assert is_visible((5, 5), (6, 4), fov, 1, 9, 1, 9) is True


def test_is_visible_outside_box():
    fov = [True] * FOV_SIZE
    assert is_visible((5, 5), (10, 5), fov, 1, 9, 1, 9) is False


def test_is_visible_only_centre_lit():
    fov = [False] * FOV_SIZE
    fov[FOV_SIZE // 2] = True
    assert is_visible((5, 5), (5, 5), fov, 1, 9, 1, 9) is True
    assert is_visible((5, 5), (5, 6), fov, 1, 9, 1, 9) is False


def test_character_defaults_are_independent():
    a = PcComponent(name="a")
    b = PcComponent(name="b")
    a.stats["hp"] = 5
    assert b.stats == {}
    assert len(a.fov) == FOV_SIZE
    npc = NpcComponent()
    assert npc.spawner is None