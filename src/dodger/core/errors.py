"""Error types raised by the dodger engine."""


class ConfigurationError(ValueError):
    """Raised at session start when the supplied configuration is unusable."""
