"""Load the function catalog and the hand-written runtime template.

Reads api/api.json and templates/runtime.py.in.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .schema_parser import CatalogError

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).parent.parent
CATALOG_PATH = ROOT_DIR / "api" / "api.json"
RUNTIME_TEMPLATE_PATH = ROOT_DIR / "templates" / "runtime.py.in"


def load_catalog(path: Path | None = None) -> list[dict[str, Any]]:
    """Load the ordered descriptor catalog from disk."""
    catalog_file = path or CATALOG_PATH
    with open(catalog_file, encoding="utf-8") as f:
        catalog = json.load(f)
    if not isinstance(catalog, list):
        raise CatalogError(
            f"{catalog_file}: expected a JSON array of descriptors,"
            f" got {type(catalog).__name__}"
        )
    logger.info("Loaded %d descriptors from %s", len(catalog), catalog_file)
    return catalog


def load_runtime_template(path: Path | None = None) -> str:
    """Read the runtime template that is copied verbatim into the output."""
    template_file = path or RUNTIME_TEMPLATE_PATH
    with open(template_file, encoding="utf-8") as f:
        return f.read()


def build_api_map(catalog: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Key descriptors by name, keeping catalog order."""
    return {desc["name"]: desc for desc in catalog}
