from .fov import TransparencyMap, bresenham_line, compute_fov, is_visible_line
from .visibility import VisibilityTracker

__all__ = ["TransparencyMap", "bresenham_line", "compute_fov", "is_visible_line", "VisibilityTracker"]
