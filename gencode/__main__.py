"""Entry point: python -m gencode

Reads api/api.json, generates generated/talib_api.py.
"""

from __future__ import annotations

import logging

from .loader import load_catalog
from .context_builder import build_context
from .codegen import generate


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    catalog = load_catalog()
    context = build_context(catalog)
    generate(context)


if __name__ == "__main__":
    main()
