"""Encoding and decoding of Postgres array literals such as {"2BHK","3BHK"}."""

from typing import Iterable, List, Union


def encode_pg_array(values: Iterable[str]) -> str:
    """Encode values as a Postgres text-array literal. Empty input gives '{}'."""
    items = []
    for value in values:
        value = str(value).strip()
        if not value:
            continue
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        items.append(f'"{escaped}"')
    return "{" + ",".join(items) + "}"


def parse_pg_array(literal: str) -> List[str]:
    """Decode a one-dimensional Postgres array literal into a list of strings."""
    text = literal.strip()
    if not (text.startswith("{") and text.endswith("}")):
        raise ValueError(f"Not an array literal: {literal!r}")

    body = text[1:-1]
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    was_quoted = False
    i = 0

    while i < len(body):
        char = body[i]
        if in_quotes:
            if char == "\\" and i + 1 < len(body):
                current.append(body[i + 1])
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
            was_quoted = True
        elif char == ",":
            values.append(_finish_item(current, was_quoted))
            current, was_quoted = [], False
        else:
            current.append(char)
        i += 1

    if in_quotes:
        raise ValueError(f"Unterminated quote in array literal: {literal!r}")

    if current or was_quoted or values:
        values.append(_finish_item(current, was_quoted))

    return values


def _finish_item(chars: List[str], was_quoted: bool) -> str:
    item = "".join(chars)
    return item if was_quoted else item.strip()


def coerce_string_list(value: Union[str, Iterable[str], None]) -> Union[List[str], None]:
    """Accept either a native list or an array literal and return a clean list."""
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return []
        if value.strip().startswith("{"):
            items = parse_pg_array(value)
        else:
            items = value.split(",")
    else:
        items = list(value)
    return [str(item).strip() for item in items if str(item).strip()]
