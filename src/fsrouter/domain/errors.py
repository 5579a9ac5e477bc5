from __future__ import annotations

"""
Generation Error Taxonomy.

Fatal errors abort a run before anything is written to the output path.
The only non-fatal condition is a middleware rule that references a group
missing from the scanned tree; it is reported as a warning category so it
can be collected, logged, and asserted on in tests.
"""

from typing import Optional, Tuple


class GenerationError(Exception):
    """
    Base class for every fatal generator failure.

    Attributes:
        path: Filesystem path (or config key) the failure refers to.
    """

    kind: str = "generation"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message)


class ConfigurationError(GenerationError):
    """Missing or malformed configuration. Raised before any traversal."""

    kind = "configuration"


class FilesystemError(GenerationError):
    """The API root or the output target cannot be read or written."""

    kind = "filesystem"


class StructureError(GenerationError):
    """The handler tree cannot be mapped to unambiguous routes."""

    kind = "structure"


class MiddlewareReferenceWarning(UserWarning):
    """A group middleware rule names a top-level group that does not exist."""

    def __init__(self, group: str, middlewares: Tuple[str, ...]) -> None:
        self.group = group
        self.middlewares = middlewares
        super().__init__(
            f"Group middleware rule for '{group}' ignored: "
            f"no top-level directory with that name"
        )
