from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration (defaults, config files, CLI flags)
and the generator. Coerces loosely typed input (CSV strings, JSON text)
into the shapes the pipeline expects, collects non-fatal warnings, and
raises ConfigurationError for anything that would produce broken output.
"""

import json
import logging
import re
from typing import Any, Dict, List, Tuple

from fsrouter.domain.config import get_default_config
from fsrouter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_GO_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_GO_QUALIFIED_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

_GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type", "var",
})

# Names the generated file already binds at package or function scope
_RESERVED_QUALIFIERS = frozenset({"http", "json", "mux", "mw", "r", "h"})


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a generator configuration.

    Missing keys are filled from the defaults. In non-strict mode, loosely
    typed values are coerced and the conversion is reported as a warning;
    in strict mode they raise.

    Args:
        config: Raw configuration mapping.
        strict: If True, reject values that would otherwise be coerced.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.

    Raises:
        ConfigurationError: Missing import prefix, malformed group middleware
            mapping, or values that are not valid Go identifiers.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Invalid config type: expected dict, received {type(config).__name__}"
        )

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    # 1. Scalars
    for field in ("api_root", "output_path", "package_name", "source_extension"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)
    for field in ("import_prefix", "middleware_package", "not_found_handler", "not_found_import"):
        merged[field] = _as_str(merged.get(field), "", field, warnings, strict)

    # 2. Middleware lists
    merged["global_middlewares"] = _as_name_list(
        merged.get("global_middlewares"), "global_middlewares", warnings, strict
    )
    merged["group_middlewares"] = parse_group_middlewares(
        merged.get("group_middlewares"), warnings, strict
    )

    # 3. Domain rules
    merged["source_extension"] = _normalize_extension(merged["source_extension"], warnings, strict)
    _check_required(merged)
    _check_identifiers(merged)

    return merged, warnings


def parse_group_middlewares(
        value: Any,
        warnings: List[str],
        strict: bool = False,
) -> Dict[str, List[str]]:
    """
    Normalize the group-to-middleware mapping.

    Accepts a dict or its JSON text. Values may be lists of names or CSV
    strings, e.g. ``{"users": "auth,rateLimit", "admin": ["adminAuth"]}``.

    Raises:
        ConfigurationError: If the JSON is malformed or not an object.
    """
    if value is None or value == "":
        return {}

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise ConfigurationError(f"Malformed group middleware JSON ({e})") from e

    if not isinstance(value, dict):
        raise ConfigurationError(
            f"Group middlewares must be a JSON object, received {type(value).__name__}"
        )

    out: Dict[str, List[str]] = {}
    for group, names in value.items():
        group_name = str(group).strip()
        if not group_name:
            raise ConfigurationError("Group middleware mapping contains an empty group name")
        out[group_name] = _as_name_list(names, f"group_middlewares[{group_name}]", warnings, strict)
    return out


def is_go_identifier(name: str) -> bool:
    return bool(_GO_IDENT_RE.match(name)) and name not in _GO_KEYWORDS


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise ConfigurationError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_name_list(value: Any, field: str, warnings: List[str], strict: bool) -> List[str]:
    """Accept a list of names or a CSV string; blanks are dropped."""
    if value is None:
        return []

    if isinstance(value, str):
        return [x.strip() for x in value.split(",") if x.strip()]

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                if item.strip():
                    out.append(item.strip())
                continue
            msg = f"Invalid item in '{field}[{i}]': expected str."
            if strict:
                raise ConfigurationError(msg)
            warnings.append(f"{msg} Item discarded.")
        return out

    raise ConfigurationError(
        f"Invalid field '{field}': expected list or CSV string, received {type(value).__name__}"
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN RULES
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, warnings: List[str], strict: bool) -> str:
    """Ensure the handler extension is prefixed with a dot."""
    if ext.startswith("."):
        return ext
    if strict:
        raise ConfigurationError(f"Invalid extension '{ext}': must start with '.'")
    warnings.append(f"Extension '{ext}' corrected to '.{ext}'.")
    return "." + ext


def _check_required(cfg: Dict[str, Any]) -> None:
    if not cfg["import_prefix"]:
        raise ConfigurationError("Missing required option 'import_prefix'")


def _check_identifiers(cfg: Dict[str, Any]) -> None:
    """Reject values that would be pasted into Go source as broken code."""
    if not is_go_identifier(cfg["package_name"]):
        raise ConfigurationError(f"Invalid Go package name '{cfg['package_name']}'")

    names = list(cfg["global_middlewares"])
    for group_names in cfg["group_middlewares"].values():
        names.extend(group_names)
    for name in names:
        if not _is_reference(name):
            raise ConfigurationError(f"Invalid middleware identifier '{name}'")

    handler = cfg["not_found_handler"]
    if handler:
        if not _is_reference(handler):
            raise ConfigurationError(f"Invalid not-found handler reference '{handler}'")
        if cfg["not_found_import"]:
            qualifier = handler.split(".", 1)[0] if "." in handler else ""
            if not qualifier:
                raise ConfigurationError(
                    "'not_found_import' requires a qualified handler (package.Symbol)"
                )
            if qualifier in _RESERVED_QUALIFIERS or qualifier.startswith("h_"):
                raise ConfigurationError(
                    f"Not-found handler package alias '{qualifier}' clashes with generated names"
                )


def _is_reference(name: str) -> bool:
    if not _GO_QUALIFIED_RE.match(name):
        return False
    return all(part not in _GO_KEYWORDS for part in name.split("."))
