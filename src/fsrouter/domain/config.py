from __future__ import annotations

"""
Configuration Domain Management.

Holds generator defaults and loads optional JSON configuration files.
Values read here are raw; normalization happens in the pipeline validator.
"""

import json
import logging
import os
from typing import Any, Dict, Tuple

from fsrouter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_API_ROOT = "api"
DEFAULT_OUTPUT_PATH = "routes_gen.go"
DEFAULT_PACKAGE_NAME = "main"
DEFAULT_SOURCE_EXTENSION = ".go"
DEFAULT_GLOBAL_MIDDLEWARES = ["loggingMiddleware"]

ENTRYPOINT_NAME = "RegisterRoutes"
ROUTER_IMPORT = "github.com/gorilla/mux"
MIDDLEWARE_ALIAS = "mw"

# Recognized HTTP method tokens, in canonical (uppercase) form
HTTP_METHODS: Tuple[str, ...] = (
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "CONNECT",
    "TRACE",
)

CONFIG_KEYS: Tuple[str, ...] = (
    "api_root",
    "output_path",
    "package_name",
    "import_prefix",
    "middleware_package",
    "global_middlewares",
    "group_middlewares",
    "not_found_handler",
    "not_found_import",
    "source_extension",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default generator configuration.

    ``import_prefix`` has no usable default; validation rejects it empty.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "api_root": DEFAULT_API_ROOT,
        "output_path": DEFAULT_OUTPUT_PATH,

        # Generated Go package
        "package_name": DEFAULT_PACKAGE_NAME,
        "import_prefix": "",
        "source_extension": DEFAULT_SOURCE_EXTENSION,

        # Middleware
        "middleware_package": "",
        "global_middlewares": list(DEFAULT_GLOBAL_MIDDLEWARES),
        "group_middlewares": {},

        # 404 handling
        "not_found_handler": "",
        "not_found_import": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Unknown keys are dropped with a warning so that a typo cannot silently
    change behavior.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: Known keys found in the file.

    Raises:
        ConfigurationError: If the file is unreadable or not a JSON object.
    """
    if not os.path.isfile(path):
        raise ConfigurationError("Configuration file not found", path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read configuration file ({e})", path) from e

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a JSON object", path)

    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Unknown configuration key '{key}' in {path} ignored.")
            continue
        out[key] = value

    logger.debug(f"Loaded {len(out)} configuration keys from {path}")
    return out
