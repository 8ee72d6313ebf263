"""Single source of truth for the kafkalo version string."""

__version__: str = "0.3.0"
