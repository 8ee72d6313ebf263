"""Schema path normalisation.

The schema directory is always passed in explicitly by the caller;
nothing here reads process-wide settings.
"""

from __future__ import annotations

import os


def normalize_schema_path(path: str, schema_dir: str | None) -> str:
    """Resolve a schema file reference against *schema_dir*.

    Returns the join of *schema_dir* and *path* when *schema_dir* is
    non-empty, otherwise *path* unchanged.

    >>> normalize_schema_path("a.avsc", "schemas")
    'schemas/a.avsc'
    >>> normalize_schema_path("a.avsc", "")
    'a.avsc'
    """
    if not schema_dir:
        return path
    return os.path.join(schema_dir, path)
