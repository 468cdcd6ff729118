"""Input-layer helpers that feed the engine's control slot."""

from .tilt import TiltSmoother

__all__ = ["TiltSmoother"]
