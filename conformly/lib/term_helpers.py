"""
Helper functions for rendering terms and checking container shapes.
"""

import json
from collections.abc import Mapping
from typing import Any


def render_term(term: Any) -> str:
    """
    Render a term for an error message.

    Strings are double-quoted so they stand apart from the surrounding text;
    containers are rendered recursively, everything else falls back to repr().

    Examples:
        render_term("foo")          # '"foo"'
        render_term([1, "foo", 4])  # '[1, "foo", 4]'
        render_term(range(1, 5))    # 'range(1, 5)'
    """
    if isinstance(term, str):
        return json.dumps(term, ensure_ascii=False)

    if isinstance(term, list):
        return "[" + ", ".join(render_term(item) for item in term) + "]"

    # Named tuples keep their own repr
    if type(term) is tuple:
        if len(term) == 1:
            return "(" + render_term(term[0]) + ",)"
        return "(" + ", ".join(render_term(item) for item in term) + ")"

    if isinstance(term, (set, frozenset)):
        if not term:
            return repr(term)
        items = ", ".join(render_term(item) for item in term)
        if isinstance(term, frozenset):
            return "frozenset({" + items + "})"
        return "{" + items + "}"

    if isinstance(term, dict):
        pairs = (f"{render_term(k)}: {render_term(v)}" for k, v in term.items())
        return "{" + ", ".join(pairs) + "}"

    return repr(term)


def render_keys(keys: list[Any]) -> str:
    """Render a list of mapping keys, leaving string keys unquoted."""
    rendered = (key if isinstance(key, str) else render_term(key) for key in keys)
    return "[" + ", ".join(rendered) + "]"


def is_mapping(term: Any) -> bool:
    return isinstance(term, Mapping)


def is_list(term: Any) -> bool:
    return isinstance(term, list)


def is_tuple(term: Any) -> bool:
    return isinstance(term, tuple)
