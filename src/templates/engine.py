from __future__ import annotations

import json
import re
from typing import Any, List, Mapping, Optional

# {{ name }} with optional inner whitespace; names are letters, digits, "_" and "."
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_.]+)\s*\}\}")


def extract_placeholders(body: str) -> List[str]:
    """
    Returns placeholder names in order of first appearance, without duplicates.

        >>> extract_placeholders("Hi {{name}}, re {{ topic }} / {{name}}")
        ['name', 'topic']
    """
    if not body:
        return []
    # dict keeps insertion order, so this dedupes by first occurrence
    return list(dict.fromkeys(m.group(1) for m in PLACEHOLDER_PATTERN.finditer(body)))


def render_template(body: str, values: Optional[Mapping[str, Any]]) -> str:
    """
    Substitutes every placeholder that has a non-None value.

    Placeholders without a value are left exactly as written (inner whitespace
    included) so a partially rendered prompt stays visibly incomplete.
    """
    if not body:
        return ""
    values = values or {}

    def _sub(match: re.Match) -> str:
        value = values.get(match.group(1))
        if value is None:
            return match.group(0)
        return stringify_value(value)

    return PLACEHOLDER_PATTERN.sub(_sub, body)


def stringify_value(value: Any) -> str:
    # bool before int/float: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # beyond 1e16 floats stop being exact integers; keep exponent form
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    return str(value)
