"""Console output for the installer."""

from .reporter import MessageKind, Reporter, STYLES, render

__all__ = ["MessageKind", "Reporter", "STYLES", "render"]
