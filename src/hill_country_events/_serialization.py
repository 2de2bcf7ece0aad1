"""JSON key transformation from the site's camelCase to snake_case."""

from __future__ import annotations

import re
from typing import Any

_CAMEL_TO_SNAKE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _to_snake(name: str) -> str:
    return _CAMEL_TO_SNAKE.sub(r"_\1", name).lower()


def decamelize(data: Any) -> Any:
    """Recursively convert all dict keys from camelCase to snake_case.

    Keys already in snake_case pass through unchanged, so records coming
    from the database layer and from the JSON API can be mixed.
    """
    if isinstance(data, dict):
        return {_to_snake(k): decamelize(v) for k, v in data.items()}
    if isinstance(data, list):
        return [decamelize(item) for item in data]
    return data
