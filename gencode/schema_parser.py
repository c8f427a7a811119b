"""Validate catalog descriptors and project their types to Python.

Handles:
- Required descriptor keys and field shapes
- Identifier and keyword checks for every generated name
- Uniqueness of public names across the catalog
- Uniqueness of field names within a descriptor
- Schema type tag -> Python annotation
- Option documentation (range, MAType default)
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .naming import BUILTIN_NAMES, RESERVED_NAMES, is_field_name, is_identifier, public_names

logger = logging.getLogger(__name__)

_DESCRIPTOR_KEYS = (
    "name",
    "camelCaseName",
    "inputs",
    "options",
    "outputs",
)
_OPTION_KEYS = ("type", "displayName", "hint", "defaultValue")

_SCALAR_TAGS = {"Integer", "Double"}
_SEQUENCE_TAGS = {"Integer[]", "Double[]"}

MA_TYPE = "MAType"
MA_TYPE_DEFAULT = "MAType.SMA"

OUTPUT_ANNOTATION = "list[float]"


class CatalogError(ValueError):
    """The catalog is malformed or would produce an invalid module."""


def project_type(tag: str) -> str:
    """Map a schema type tag to a Python annotation.

    Unknown tags pass through unchanged; the runtime template is expected
    to declare a matching name.
    """
    if tag in _SEQUENCE_TAGS:
        return "Sequence[float]"
    if tag in _SCALAR_TAGS:
        return "float"
    return tag


def clean_text(text: str) -> str:
    """Collapse whitespace and make text safe inside a triple-quoted docstring."""
    text = re.sub(r"\s+", " ", str(text)).strip()
    text = text.replace("\\", "\\\\")
    return text.replace('"""', '\\"\\"\\"')


def describe_option(option: dict[str, Any]) -> list[str]:
    """Build the docstring lines documenting one option."""
    type_tag = option["type"]
    range_ = option.get("range")
    bounds = f", min: {range_['min']}, max: {range_['max']}" if range_ else ""
    if type_tag == MA_TYPE:
        default = f"``{MA_TYPE_DEFAULT}``"
    else:
        default = option["defaultValue"]
    return [
        f"{clean_text(option['displayName'])}.",
        f"{clean_text(option['hint']).rstrip('.')}. ({type_tag}{bounds})",
        f"Default: {default}",
    ]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _where(index: int, desc: Any) -> str:
    if isinstance(desc, dict) and isinstance(desc.get("name"), str):
        return f"descriptor #{index} ({desc['name']})"
    return f"descriptor #{index}"


def _check_fields(
    where: str, kind: str, fields: Any, required: tuple[str, ...],
) -> list[str]:
    """Check a list of field objects and return their names in order."""
    if not isinstance(fields, list):
        raise CatalogError(f"{where}: '{kind}' must be a list")
    names = []
    for pos, field in enumerate(fields):
        if not isinstance(field, dict) or "name" not in field:
            raise CatalogError(f"{where}: {kind}[{pos}] must be an object with a 'name'")
        name = field["name"]
        if not is_field_name(name):
            raise CatalogError(f"{where}: {kind}[{pos}] name {name!r} is not a valid field name")
        missing = [key for key in required if key not in field]
        if missing:
            raise CatalogError(
                f"{where}: {kind} {name!r} is missing {', '.join(missing)}"
            )
        if "defaultValue" in required and not _is_number(field["defaultValue"]):
            raise CatalogError(f"{where}: {kind} {name!r} defaultValue must be a number")
        names.append(name)
    return names


def _check_range(where: str, option: dict[str, Any]) -> None:
    range_ = option.get("range")
    if range_ is None:
        return
    if not isinstance(range_, dict) or "min" not in range_ or "max" not in range_:
        raise CatalogError(f"{where}: option {option['name']!r} range needs 'min' and 'max'")
    if not (_is_number(range_["min"]) and _is_number(range_["max"])):
        raise CatalogError(f"{where}: option {option['name']!r} range bounds must be numbers")
    if range_["min"] > range_["max"]:
        raise CatalogError(
            f"{where}: option {option['name']!r} range min {range_['min']}"
            f" exceeds max {range_['max']}"
        )


def validate_descriptor(index: int, desc: Any) -> None:
    """Validate the structure of one descriptor."""
    where = _where(index, desc)
    if not isinstance(desc, dict):
        raise CatalogError(f"{where}: expected an object, got {type(desc).__name__}")

    missing = [key for key in _DESCRIPTOR_KEYS if key not in desc]
    if missing:
        raise CatalogError(f"{where}: missing required key(s) {', '.join(missing)}")

    name, alias = desc["name"], desc["camelCaseName"]
    for label, value in (("name", name), ("camelCaseName", alias)):
        if not is_identifier(value):
            raise CatalogError(f"{where}: {label} {value!r} is not a valid identifier")
    if name == alias:
        raise CatalogError(f"{where}: camelCaseName must differ from name")

    input_names = _check_fields(where, "inputs", desc["inputs"], ("type",))
    option_names = _check_fields(where, "options", desc["options"], _OPTION_KEYS)
    output_names = _check_fields(where, "outputs", desc["outputs"], ())

    seen: set[str] = set()
    for field_name in input_names + option_names:
        if field_name in seen:
            raise CatalogError(f"{where}: duplicate field name {field_name!r}")
        seen.add(field_name)

    if not output_names:
        raise CatalogError(f"{where}: at least one output is required")
    if len(set(output_names)) != len(output_names):
        raise CatalogError(f"{where}: duplicate output names")

    for option in desc["options"]:
        _check_range(where, option)


def validate_catalog(catalog: list[Any]) -> None:
    """Validate every descriptor and the uniqueness of their public names.

    Raises CatalogError on the first problem found.
    """
    owners: dict[str, str] = {}
    for index, desc in enumerate(catalog):
        validate_descriptor(index, desc)
        where = _where(index, desc)
        for public in public_names(desc["name"], desc["camelCaseName"]):
            if public in RESERVED_NAMES:
                raise CatalogError(f"{where}: {public!r} is reserved by the runtime")
            if public in BUILTIN_NAMES:
                raise CatalogError(f"{where}: {public!r} would shadow a Python builtin")
            if public in owners:
                raise CatalogError(
                    f"{where}: {public!r} collides with {owners[public]}"
                )
            owners[public] = where
    logger.debug("Validated %d descriptors", len(catalog))
