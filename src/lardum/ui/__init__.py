"""Front-end independent presentation helpers."""
from .frame import Frame, StatBar, build_frame

__all__ = ["Frame", "StatBar", "build_frame"]
