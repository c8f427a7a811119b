"""Derive generated identifiers from catalog names.

Pattern for a descriptor named NAME with alias ALIAS:
  - metadata binding  -> __NAME_API__
  - parameter record  -> NAMEParams
  - result record     -> NAMEResult
  - public function   -> NAME
  - alias binding     -> ALIAS

Examples:
  SMA      -> __SMA_API__, SMAParams, SMAResult
  CDLDOJI  -> __CDLDOJI_API__, CDLDOJIParams, CDLDOJIResult
"""

from __future__ import annotations

import builtins
import keyword

# Top-level names defined by the prologue and templates/runtime.py.in.
# Catalog names must not shadow them.
RESERVED_NAMES: frozenset[str] = frozenset({
    "API",
    "_API_MAP",
    "_INTEGER_TAGS",
    "_engine",
    "_option_value",
    "Any",
    "Engine",
    "IntEnum",
    "MAType",
    "Mapping",
    "MappingProxyType",
    "NotRequired",
    "Protocol",
    "Required",
    "Sequence",
    "TALibEngine",
    "TypedDict",
    "Unpack",
    "asyncio",
    "call_func",
    "init",
})

# Builtins the generated module relies on, e.g. list[float] and len().
BUILTIN_NAMES: frozenset[str] = frozenset(dir(builtins))


def is_identifier(name: object) -> bool:
    """Return True if name can be used as a Python identifier."""
    return (
        isinstance(name, str)
        and name.isidentifier()
        and not keyword.iskeyword(name)
    )


def api_binding_name(name: str) -> str:
    """Name of the module-level binding holding a function's metadata."""
    return f"__{name}_API__"


def params_class_name(name: str) -> str:
    """Name of the TypedDict describing a function's parameters."""
    return f"{name}Params"


def result_class_name(name: str) -> str:
    """Name of the TypedDict describing a function's result."""
    return f"{name}Result"


def public_names(name: str, alias: str) -> list[str]:
    """All top-level names a descriptor introduces into the generated module."""
    return [
        name,
        alias,
        params_class_name(name),
        result_class_name(name),
        api_binding_name(name),
    ]


def is_field_name(name: object) -> bool:
    """Return True if name can be a field of a generated TypedDict.

    Names with a leading double underscore are mangled inside class bodies.
    """
    return is_identifier(name) and not name.startswith("__")
