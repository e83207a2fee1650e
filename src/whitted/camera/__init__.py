"""Camera models generating primary rays."""

from .pinhole import PinholeCamera

__all__ = ["PinholeCamera"]
