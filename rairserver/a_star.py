"""Best-first path search over a map's walkable tiles."""

from __future__ import annotations

import heapq

from rairserver.world import Location, MapComponent, tile_is_walkable


def heuristic(a: Location, b: Location) -> int:
    """Return the Manhattan distance between two locations."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def get_neighbours(m: MapComponent, loc: Location) -> list[Location]:
    """Return the walkable tiles in the 3x3 block around ``loc``, itself included."""
    x0, y0 = loc
    return [
        (x, y)
        for x in range(max(x0 - 1, 0), min(x0 + 1, m.width) + 1)
        for y in range(max(y0 - 1, 0), min(y0 + 1, m.height) + 1)
        if tile_is_walkable(m, x, y)
    ]


def a_star_path(m: MapComponent, start: Location, goal: Location) -> dict[Location, Location]:
    """Search from ``start`` towards ``goal`` and return the came-from map.

    Each tile is expanded at most once; follow the map back from ``goal``
    to ``start`` to read the path. ``goal`` is absent when unreachable.
    """
    frontier: list[tuple[int, Location]] = [(0, start)]
    came_from: dict[Location, Location] = {}
    cost_so_far: dict[Location, int] = {start: 0}

    while frontier:
        _, current = heapq.heappop(frontier)
        if current == goal:
            break
        for nxt in get_neighbours(m, current):
            if nxt in cost_so_far:
                continue
            cost_so_far[nxt] = 1
            heapq.heappush(frontier, (1 + heuristic(nxt, goal), nxt))
            came_from[nxt] = current

    return came_from