"""Field of view by restrictive precise angle shadowcasting."""

from __future__ import annotations

import logging
from typing import Sequence

from rairserver.world import (
    FOV_DIAMETER,
    FOV_MAX_DISTANCE,
    FOV_SIZE,
    OPAQUE_DECOR_LAYER,
    WALLS_LAYER,
    Location,
    MapComponent,
    MapLayer,
)

logger = logging.getLogger(__name__)

_QUADRANTS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def _fov_index(rel_x: int, rel_y: int) -> int:
    return rel_x + FOV_MAX_DISTANCE + (rel_y + FOV_MAX_DISTANCE) * FOV_DIAMETER


def _lit(fov: list[bool], rel_x: int, rel_y: int) -> bool:
    index = _fov_index(rel_x, rel_y)
    return 0 <= index < FOV_SIZE and fov[index]


def _transparent(m: MapComponent, walls: MapLayer, opaque: MapLayer, x: int, y: int) -> bool:
    c = x + y * m.width
    if not (0 <= c < len(walls.data) and c < len(opaque.objects)):
        return False
    return walls.data[c] == 0 and opaque.objects[c].gid == 0


def _scan_octant(
    m: MapComponent,
    walls: MapLayer,
    opaque: MapLayer,
    player: Location,
    light_walls: bool,
    dx: int,
    dy: int,
    horizontal: bool,
    fov: list[bool],
) -> None:
    """Scan one octant, marking visible cells in ``fov``.

    Vertical octants walk rows outwards along y; horizontal ones walk
    columns outwards along x.
    """
    px, py = player
    if horizontal:
        line_origin, pos_origin, line_limit, pos_limit = px, py, m.width, m.height
        dline, dpos = dx, dy
    else:
        line_origin, pos_origin, line_limit, pos_limit = py, px, m.height, m.width
        dline, dpos = dy, dx

    def to_xy(line: int, pos: int) -> Location:
        return (line, pos) if horizontal else (pos, line)

    start_angle: list[float] = []
    end_angle: list[float] = []
    obstacles_in_last_line = 0
    min_angle = 0.0
    iteration = 1

    line = line_origin + dline
    done = not 0 <= line < line_limit
    while not done:
        slopes_per_cell = 1.0 / iteration
        half_slopes = slopes_per_cell * 0.5
        processed_cell = int((min_angle + half_slopes) / slopes_per_cell)
        lowest = max(0, pos_origin - iteration)
        highest = min(pos_limit - 1, pos_origin + iteration)
        done = True

        pos = pos_origin + processed_cell * dpos
        while lowest <= pos <= highest:
            x, y = to_xy(line, pos)
            c_fov = _fov_index(x - px, y - py)
            visible = True
            extended = False
            centre_slope = processed_cell * slopes_per_cell
            start_slope = centre_slope - half_slopes
            end_slope = centre_slope + half_slopes
            blocked = not _transparent(m, walls, opaque, x, y)

            if obstacles_in_last_line > 0:
                sx, sy = to_xy(line - dline, pos)
                gx, gy = to_xy(line - dline, pos - dpos)
                straight_open = _lit(fov, sx - px, sy - py) and _transparent(m, walls, opaque, sx, sy)
                diagonal_open = _lit(fov, gx - px, gy - py) and _transparent(m, walls, opaque, gx, gy)
                if not straight_open and not diagonal_open:
                    visible = False
                else:
                    idx = 0
                    while idx < obstacles_in_last_line and visible:
                        if start_slope <= end_angle[idx] and end_slope >= start_angle[idx]:
                            if blocked:
                                if start_angle[idx] < centre_slope < end_angle[idx]:
                                    visible = False
                            elif start_slope >= start_angle[idx] and end_slope <= end_angle[idx]:
                                visible = False
                            else:
                                start_angle[idx] = min(start_angle[idx], start_slope)
                                end_angle[idx] = max(end_angle[idx], end_slope)
                                extended = True
                            if horizontal:
                                # Horizontal octants skip the obstacle after an overlapping one.
                                idx += 1
                        idx += 1

            if visible:
                done = False
                fov[c_fov] = True
                if blocked:
                    if min_angle >= start_slope:
                        min_angle = end_slope
                        if processed_cell == iteration:
                            done = True
                    elif not extended:
                        start_angle.append(start_slope)
                        end_angle.append(end_slope)
                    if not light_walls:
                        fov[c_fov] = False

            processed_cell += 1
            pos += dpos

        if iteration == FOV_MAX_DISTANCE:
            done = True
        iteration += 1
        obstacles_in_last_line = len(start_angle)
        line += dline
        if not 0 <= line < line_limit:
            done = True


def _quadrant(
    m: MapComponent,
    walls: MapLayer,
    opaque: MapLayer,
    player: Location,
    light_walls: bool,
    dx: int,
    dy: int,
) -> list[bool]:
    fov = [False] * FOV_SIZE
    fov[_fov_index(0, 0)] = True
    _scan_octant(m, walls, opaque, player, light_walls, dx, dy, False, fov)
    _scan_octant(m, walls, opaque, player, light_walls, dx, dy, True, fov)
    return fov


def compute_fov_restrictive_shadowcasting(
    m: MapComponent, player_loc: Location, light_walls: bool
) -> list[bool]:
    """Return the field of view around ``player_loc`` as a flat list of booleans.

    The cell at offset (rx, ry) from the player is at index
    ``rx + 4 + (ry + 4) * 9``. A map without walls or opaque layer gives
    an all-False view.
    """
    walls = m.layers.get(WALLS_LAYER)
    opaque = m.layers.get(OPAQUE_DECOR_LAYER)
    if walls is None or opaque is None or not walls.name or not opaque.name:
        logger.error("missing walls or opaque layer for map %s", m.name)
        return [False] * FOV_SIZE

    player = (int(player_loc[0]), int(player_loc[1]))
    quadrants = [_quadrant(m, walls, opaque, player, light_walls, dx, dy) for dx, dy in _QUADRANTS]
    return [any(cells) for cells in zip(*quadrants)]


def format_fov(fov: Sequence[bool]) -> list[str]:
    """Render a field of view as rows of '1' and '0', highest y first."""
    if len(fov) != FOV_SIZE:
        raise ValueError(f"field of view must have {FOV_SIZE} cells, got {len(fov)}")
    return [
        "".join("1" if fov[x + y * FOV_DIAMETER] else "0" for x in range(FOV_DIAMETER))
        for y in reversed(range(FOV_DIAMETER))
    ]


def log_fov(fov: Sequence[bool], name: str) -> None:
    """Log a field of view row by row at debug level."""
    for y, row in zip(reversed(range(FOV_DIAMETER)), format_fov(fov)):
        logger.debug("%s %d: %s", name, y, row)