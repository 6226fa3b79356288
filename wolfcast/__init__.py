"""Grid-map raycasting explorer with textured walls and a minimap."""

__version__ = "0.1.0"
__all__ = ["app", "mapfile", "minimap", "movement", "raycast", "textutil"]