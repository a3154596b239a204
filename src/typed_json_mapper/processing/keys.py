"""Field name to wire key conversion."""

from __future__ import annotations

import re

_UPPERCASE = re.compile(r"[A-Z]")


def to_snake_case(name: str) -> str:
    """Convert a camelCase field name to its snake_case wire key.

    Every ASCII uppercase letter becomes an underscore followed by its lowercase form,
    so `camelCaseProp` becomes `camel_case_prop` and `URL` becomes `_u_r_l`.

    Args:
        name (str): Declared field name.

    Returns:
        str: Wire key.
    """
    return _UPPERCASE.sub(lambda match: "_" + match.group(0).lower(), name)


def wire_key(name: str, *, transform_keys: bool) -> str:
    """Return the key a field is looked up or dumped under."""
    return to_snake_case(name) if transform_keys else name
