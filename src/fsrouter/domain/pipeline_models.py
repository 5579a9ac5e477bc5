from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object handed from the generation engine to the CLI,
and the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one generator run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Error category (configuration/filesystem/structure).
        api_root: Normalized directory that was scanned.
        output_path: Normalized target file.
        written: Whether the output file was (re)written.
        dry_run: Whether the run only rendered text.
        route_count: Number of registered routes.
        group_count: Number of top-level groups found.
        warnings: Non-fatal messages collected during the run.
        source: Generated Go source (empty on failure).
    """
    ok: bool
    error: str

    api_root: str
    output_path: str

    error_kind: str = ""
    written: bool = False
    dry_run: bool = False

    route_count: int = 0
    group_count: int = 0
    warnings: List[str] = field(default_factory=list)

    source: str = ""

    def summary(self) -> Dict[str, Any]:
        """Serializable view without the generated source."""
        return {
            "ok": self.ok,
            "error": self.error,
            "error_kind": self.error_kind,
            "api_root": self.api_root,
            "output_path": self.output_path,
            "written": self.written,
            "dry_run": self.dry_run,
            "route_count": self.route_count,
            "group_count": self.group_count,
            "warnings": list(self.warnings),
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        error_kind: str,
        api_root: str = "",
        output_path: str = "",
        warnings: Optional[List[str]] = None,
) -> GenerationResult:
    """
    Create a failed generation result.

    Args:
        error: Detailed error description.
        error_kind: Category taken from the raised error.
        api_root: The directory that was being scanned.
        output_path: The file that was not written.
        warnings: Warnings collected before the failure.

    Returns:
        GenerationResult: An immutable error result object.
    """
    return GenerationResult(
        ok=False,
        error=error,
        error_kind=error_kind,
        api_root=api_root,
        output_path=output_path,
        warnings=warnings or [],
    )


def create_success_result(
        api_root: str,
        output_path: str,
        source: str,
        route_count: int,
        group_count: int,
        written: bool,
        dry_run: bool = False,
        warnings: Optional[List[str]] = None,
) -> GenerationResult:
    """
    Create a successful generation result.

    Args:
        api_root: Normalized input directory.
        output_path: Normalized target file.
        source: Generated Go source text.
        route_count: Number of routes registered.
        group_count: Number of top-level groups.
        written: Whether the output file was written.
        dry_run: Whether the run skipped the write.
        warnings: Non-fatal messages collected during the run.

    Returns:
        GenerationResult: An immutable success result object.
    """
    return GenerationResult(
        ok=True,
        error="",
        api_root=api_root,
        output_path=output_path,
        written=written,
        dry_run=dry_run,
        route_count=route_count,
        group_count=group_count,
        warnings=warnings or [],
        source=source,
    )
