"""Game-world logic for a multi-user dungeon server."""

__version__ = "0.1.0"

__all__ = [
    "a_star",
    "censor_sensor",
    "fov",
    "game_queue_handlers",
    "queue_messages",
    "random_helper",
    "spawning",
    "world",
]