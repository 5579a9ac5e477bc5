from __future__ import annotations

"""
Identifier Mapper.

Derives Go identifiers (import aliases, subrouter variables) from segment
paths. The mapping is injective:

- ``sanitize_segment`` keeps ASCII letters and digits and escapes everything
  else, the escape letter itself, and a leading digit as ``X`` followed by
  two uppercase hex digits per UTF-8 byte. Its output never contains ``_``.
- Dynamic segments are tagged with ``XP``. ``P`` is not a hex digit, so the
  tag cannot come out of escaping a static name.
- Tokens are joined with ``_``, which no token contains.

Every tag-to-text decision lives in ``segment_token``.
"""

from typing import Sequence

from fsrouter.domain.route_models import Segment

ESCAPE = "X"
DYNAMIC_MARKER = ESCAPE + "P"
SEPARATOR = "_"
ALIAS_PREFIX = "h"
ROUTER_SUFFIX = "Router"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sanitize_segment(text: str) -> str:
    """
    Escape a raw name into the ``[A-Za-z0-9]`` alphabet.

    Args:
        text: Directory or parameter name.

    Returns:
        str: Identifier-safe token.
    """
    out = []
    for i, ch in enumerate(text):
        if _is_plain(ch) and not (i == 0 and ch.isdigit()):
            out.append(ch)
            continue
        out.extend(f"{ESCAPE}{byte:02X}" for byte in ch.encode("utf-8"))
    return "".join(out)


def segment_token(segment: Segment) -> str:
    """Identifier fragment for one segment, tagged by kind."""
    if segment.is_dynamic:
        return DYNAMIC_MARKER + sanitize_segment(str(segment.param_name))
    return sanitize_segment(segment.name)


def identifier_for(segments: Sequence[Segment]) -> str:
    """
    Map a segment path to its identifier.

    Two distinct paths never share an identifier. The empty path (API root)
    maps to "".
    """
    return SEPARATOR.join(segment_token(s) for s in segments)


def package_alias(segments: Sequence[Segment]) -> str:
    """
    Import alias for the handler package at a segment path.

    Examples:
        ()                         -> "h"
        (users,)                   -> "h_users"
        (users, [userId])          -> "h_users_XPuserId"
    """
    ident = identifier_for(segments)
    return f"{ALIAS_PREFIX}{SEPARATOR}{ident}" if ident else ALIAS_PREFIX


def router_variable(segment: Segment) -> str:
    """Subrouter variable name for a top-level group, e.g. ``usersRouter``."""
    return segment_token(segment) + ROUTER_SUFFIX

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _is_plain(ch: str) -> bool:
    return ch != ESCAPE and ch.isascii() and ch.isalnum()
