"""Shared fixtures for generator tests.

Generated modules are written under tmp_path and imported from there, so
tests never touch generated/ in the repository. FakeEngine stands in for
the TA-Lib binding.
"""

from __future__ import annotations

import copy
import importlib.util
import itertools
from types import ModuleType
from typing import Any, Callable

import pytest

from gencode.codegen import generate
from gencode.context_builder import build_context
from gencode.loader import load_catalog


SMA_DESCRIPTOR: dict[str, Any] = {
    "name": "SMA",
    "camelCaseName": "sma",
    "group": "Overlap Studies",
    "description": "Simple Moving Average",
    "inputs": [{"name": "inReal", "type": "Double[]"}],
    "options": [
        {
            "name": "timePeriod",
            "type": "Integer",
            "displayName": "Time Period",
            "hint": "Number of period",
            "defaultValue": 30,
        },
    ],
    "outputs": [{"name": "outReal"}],
}

_module_ids = itertools.count()


class FakeEngine:
    """Engine double: records calls and echoes the first input per output."""

    def __init__(self, output_count: int = 1) -> None:
        self.output_count = output_count
        self.calls: list[tuple[str, list[Any], list[Any]]] = []

    def compute(self, function_id, inputs, options):
        self.calls.append((function_id, list(inputs), list(options)))
        first = list(inputs[0]) if inputs else []
        return [first for _ in range(self.output_count)]


@pytest.fixture
def sma_descriptor() -> dict[str, Any]:
    return copy.deepcopy(SMA_DESCRIPTOR)


@pytest.fixture
def make_descriptor() -> Callable[..., dict[str, Any]]:
    """Return a factory building a valid descriptor with overrides applied.

    Usage::

        desc = make_descriptor("EMA", camelCaseName="ema", options=[])
    """
    def _make(name: str = "SMA", **overrides: Any) -> dict[str, Any]:
        desc = copy.deepcopy(SMA_DESCRIPTOR)
        desc["name"] = name
        desc["camelCaseName"] = name.lower()
        desc.update(overrides)
        return desc
    return _make


@pytest.fixture(scope="session")
def catalog() -> list[dict[str, Any]]:
    """The real catalog from api/api.json."""
    return load_catalog()


@pytest.fixture
def load_generated(tmp_path) -> Callable[[list[dict[str, Any]]], ModuleType]:
    """Return a callable that generates a module for a catalog and imports it."""
    def _load(catalog: list[dict[str, Any]]) -> ModuleType:
        name = f"talib_api_{next(_module_ids)}"
        path = generate(build_context(catalog), output_path=tmp_path / f"{name}.py")
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return _load


@pytest.fixture
def talib_api(load_generated, catalog) -> ModuleType:
    """A freshly generated module for the real catalog, not yet initialised."""
    return load_generated(catalog)
