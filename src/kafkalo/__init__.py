"""kafkalo — declarative administration for a Kafka ecosystem.

Loads a (possibly SOPS-encrypted) settings file, resolves declared input
files and talks to Kafka Connect through a strict layered architecture.
"""

from kafkalo.version import __version__

__all__: list[str] = ["__version__"]
