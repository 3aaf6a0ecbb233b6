"""Jinja2 environment for the showcase templates."""

import os
from functools import lru_cache
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from src.utils.formatting import format_brl

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=True),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["brl"] = format_brl
    return env


def render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)
