"""Render templates and write generated output.

Takes the context from context_builder and produces generated/talib_api.py.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .loader import load_runtime_template

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
OUTPUT_DIR = Path(__file__).parent.parent / "generated"
OUTPUT_PATH = OUTPUT_DIR / "talib_api.py"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render_function(function: dict[str, Any], env: jinja2.Environment | None = None) -> str:
    """Render the declaration block for one function."""
    env = env or _environment()
    return env.get_template("function.py.j2").render(function=function)


def render_module(context: dict[str, Any], runtime_code: str) -> str:
    """Render the full module: prologue, runtime code, then every function."""
    env = _environment()
    prologue = env.get_template("prologue.py.j2").render(
        exports=context["exports"],
        api_map=context["api_map"],
        runtime_code=runtime_code.strip("\n"),
    )
    blocks = [render_function(function, env) for function in context["functions"]]
    return prologue.rstrip("\n") + "\n\n" + "\n".join(blocks)


def generate(
    context: dict[str, Any],
    output_path: Path | None = None,
    runtime_path: Path | None = None,
) -> Path:
    """Render the module and write it, replacing any previous output."""
    output = render_module(context, load_runtime_template(runtime_path))

    output_path = output_path or OUTPUT_PATH
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")

    print(f"Generated {output_path} ({context['function_count']} functions)")
    return output_path
