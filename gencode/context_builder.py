"""Build Jinja2 template context from the function catalog.

Validates the catalog, projects every field to a Python annotation and
assembles the context dicts for prologue.py.j2 and function.py.j2.
"""

from __future__ import annotations

import pprint
from typing import Any

from .loader import build_api_map
from .naming import api_binding_name, params_class_name, result_class_name
from .schema_parser import (
    OUTPUT_ANNOTATION,
    clean_text,
    describe_option,
    project_type,
    validate_catalog,
)

# Names from templates/runtime.py.in exported ahead of the generated ones
_RUNTIME_EXPORTS = ["API", "Engine", "MAType", "TALibEngine", "call_func", "init"]

_API_MAP_WIDTH = 88


def _build_inputs(desc: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "name": inp["name"],
            "type": inp["type"],
            "annotation": project_type(inp["type"]),
        }
        for inp in desc["inputs"]
    ]


def _build_options(desc: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "name": opt["name"],
            "type": opt["type"],
            "annotation": project_type(opt["type"]),
            "doc_lines": describe_option(opt),
        }
        for opt in desc["options"]
    ]


def build_function(desc: dict[str, Any]) -> dict[str, Any]:
    """Build the template context for one generated function."""
    name = desc["name"]
    return {
        "name": name,
        "alias": desc["camelCaseName"],
        "group": clean_text(desc.get("group", "")),
        "description": clean_text(desc.get("description", "")) or name,
        "binding": api_binding_name(name),
        "params_class": params_class_name(name),
        "result_class": result_class_name(name),
        "inputs": _build_inputs(desc),
        "options": _build_options(desc),
        "outputs": [
            {"name": out["name"], "annotation": OUTPUT_ANNOTATION}
            for out in desc["outputs"]
        ],
    }


def format_api_map(api_map: dict[str, Any]) -> str:
    """Render the lookup table as a Python literal, keeping catalog order."""
    return pprint.pformat(api_map, width=_API_MAP_WIDTH, sort_dicts=False)


def build_context(catalog: list[dict[str, Any]]) -> dict[str, Any]:
    """Build the full template context from the catalog."""
    validate_catalog(catalog)

    functions = [build_function(desc) for desc in catalog]
    exports = list(_RUNTIME_EXPORTS)
    for function in functions:
        exports.extend((function["name"], function["alias"]))

    return {
        "functions": functions,
        "function_count": len(functions),
        "api_map": format_api_map(build_api_map(catalog)),
        "exports": exports,
    }
