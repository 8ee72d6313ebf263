"""Infrastructure: turn declared input patterns into concrete files.

Patterns come from ``kafkalo.input_dirs`` and are either literal paths
or glob expressions.  Only ``*`` marks a pattern for expansion, so a
path such as ``topics[prod].yaml`` is taken literally.  Candidates that
are missing or not regular files are skipped with a log record; only a
malformed glob aborts resolution.

Rules
-----
* Pattern syntax is validated before any filesystem expansion.
* Expansion matches dot-files too.
* Output keeps pattern declaration order; glob matches are sorted.
* Duplicates across patterns are kept as declared.
"""

from __future__ import annotations

import glob
import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from kafkalo.exceptions import PatternError

logger = logging.getLogger(__name__)

WILDCARD = "*"


def resolve_input_files(patterns: Iterable[str | Path]) -> list[str]:
    """Expand *patterns* into validated regular-file paths.

    Raises
    ------
    PatternError
        If any pattern is a malformed glob expression.  No partial
        result is returned in that case.
    """
    pattern_list = [os.fspath(pattern) for pattern in patterns]
    for pattern in pattern_list:
        if is_glob(pattern):
            validate_pattern(pattern)

    files: list[str] = []
    for pattern in pattern_list:
        if is_glob(pattern):
            candidates = sorted(glob.glob(pattern, include_hidden=True))
            if not candidates:
                logger.info("Pattern %s matched no files", pattern)
        else:
            candidates = [pattern]
        files.extend(candidate for candidate in candidates if is_valid_input_file(candidate))

    logger.debug("Resolved input files: %s", files)
    return files


def is_glob(pattern: str) -> bool:
    """Return ``True`` when *pattern* contains the ``*`` wildcard."""
    return WILDCARD in pattern


def validate_pattern(pattern: str) -> None:
    """Reject glob expressions with an unterminated character class.

    :mod:`glob` would silently treat such a ``[`` as a literal, which
    hides typos in the settings file.
    """
    for segment in pattern.replace("\\", "/").split("/"):
        index = 0
        while index < len(segment):
            if segment[index] == "[":
                # A ']' directly after '[' or '[!' is a literal member.
                end = index + 1
                if end < len(segment) and segment[end] == "!":
                    end += 1
                if end < len(segment) and segment[end] == "]":
                    end += 1
                close = segment.find("]", end)
                if close == -1:
                    raise PatternError(
                        f"Malformed input pattern {pattern!r}: unterminated '[' character class",
                        hint="Close the class with ']' or quote the bracket as '[[]'.",
                    )
                index = close
            index += 1


def is_valid_input_file(path: str) -> bool:
    """Return ``True`` if *path* exists and is a regular file."""
    try:
        mode = os.stat(path).st_mode
    except OSError as exc:
        logger.warning("Ignoring file %s due to: %s", path, exc.strerror or exc)
        return False
    if not stat.S_ISREG(mode):
        logger.info("Ignoring file %s because it is not a regular file", path)
        return False
    return True
