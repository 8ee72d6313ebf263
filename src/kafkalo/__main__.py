"""Allow ``python -m kafkalo`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m kafkalo`` behaves identically to the ``kafkalo``
console script.
"""

from __future__ import annotations

from kafkalo.cli.app import cli

if __name__ == "__main__":
    cli()
