from __future__ import annotations

"""
Path Classifier.

Decides what a single filesystem entry means for routing: a literal path
segment, a bracket-wrapped path parameter, or a handler file named after
an HTTP method.
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from fsrouter.domain.config import HTTP_METHODS
from fsrouter.domain.errors import StructureError
from fsrouter.domain.route_models import Segment, SegmentKind

# [userId] -> userId
_DYNAMIC_RE = re.compile(r"^\[([^\[\]{}/\\:\s]+)\]$")

# Characters that would change the meaning of a mux path template
_RESERVED_CHARS = frozenset("[]{}")


@dataclass(frozen=True)
class HandlerMatch:
    """Method information extracted from a handler file name."""
    method: str
    exported_symbol: str


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify_directory(name: str, path: str = "") -> Segment:
    """
    Classify a directory name as a STATIC or DYNAMIC segment.

    Args:
        name: Directory name (no separators).
        path: Full path, used only in error messages.

    Returns:
        Segment: The classified segment.

    Raises:
        StructureError: If the name is not valid UTF-8, or uses bracket or
            brace characters in any form other than one well-formed
            ``[param]`` wrapper.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        # os.scandir maps undecodable bytes to lone surrogates
        raise StructureError("Directory name is not valid UTF-8", _printable(path or name)) from e

    match = _DYNAMIC_RE.match(name)
    if match:
        return Segment(name=name, kind=SegmentKind.DYNAMIC, param_name=match.group(1))

    if any(ch in _RESERVED_CHARS for ch in name):
        raise StructureError(
            f"Malformed dynamic segment '{name}' (expected [param])",
            path or name,
        )

    return Segment(name=name, kind=SegmentKind.STATIC)


def classify_handler(file_name: str, extension: str) -> Optional[HandlerMatch]:
    """
    Map a handler file name to its HTTP method.

    Only files carrying the configured source extension and whose stem is a
    known method token (case-insensitive) qualify; everything else is a
    helper file and yields None.

    Args:
        file_name: File name (no directories).
        extension: Source extension including the dot, e.g. ".go".

    Returns:
        Optional[HandlerMatch]: Method and exported symbol, or None.
    """
    stem, ext = os.path.splitext(file_name)
    if ext != extension:
        return None

    method = stem.upper()
    if method not in HTTP_METHODS:
        return None

    return HandlerMatch(method=method, exported_symbol=method.capitalize())

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _printable(path: str) -> str:
    """Render undecodable bytes as ``\\xNN`` so the path can be printed."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")
