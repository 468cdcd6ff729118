"""Field Dodger: lane-based obstacle dodging game engine."""

__version__ = "0.1.0"
