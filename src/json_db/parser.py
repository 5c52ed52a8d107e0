"""Utilities for parsing console command fragments.

Records and conditions share one grammar: `field=value` pairs separated by
commas, where a value is a quoted string, a number, `true`, `false` or
`null`. Commas and `=` inside quotes belong to the value.
"""

import math


def parse_scalar(value_text: str) -> object:
    """Parse scalar value into str/int/float/bool/None."""
    value_text = value_text.strip()
    if value_text.startswith('"') and value_text.endswith('"') and len(value_text) >= 2:
        return value_text[1:-1]

    lowered = value_text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None

    try:
        return int(value_text)
    except ValueError:
        pass

    try:
        number = float(value_text)
    except ValueError as error:
        raise ValueError(
            f"Некорректное значение: {value_text}. Попробуйте снова."
        ) from error

    if not math.isfinite(number):
        raise ValueError(f"Некорректное значение: {value_text}. Попробуйте снова.")
    return number


def scan_pairs(text: str) -> list[tuple[str, str]]:
    """Split `a=1, b="x, y"` into `[("a", "1"), ("b", '"x, y"')]`."""
    pairs: list[tuple[str, str]] = []
    field: str | None = None
    current: list[str] = []
    in_quotes = False

    def close_pair() -> None:
        value_text = "".join(current).strip()
        if not field or not value_text:
            piece = f"{field}={value_text}" if field is not None else value_text
            raise ValueError(f"Некорректное значение: {piece}. Попробуйте снова.")
        pairs.append((field, value_text))

    for char in text:
        if char == '"':
            if field is None:
                raise ValueError("Некорректное значение: кавычка в имени поля.")
            in_quotes = not in_quotes
        elif not in_quotes and char == "=" and field is None:
            field = "".join(current).strip()
            current = []
            continue
        elif not in_quotes and char == ",":
            close_pair()
            field, current = None, []
            continue
        current.append(char)

    if in_quotes:
        raise ValueError("Некорректное значение: незакрытая кавычка. Попробуйте снова.")
    close_pair()
    return pairs


def parse_record(values_text: str) -> dict:
    """Parse `field=value, field=value` into a record dictionary."""
    record: dict[str, object] = {}
    for field, value_text in scan_pairs(values_text):
        if field in record:
            raise ValueError(f"Некорректное значение: повтор поля {field}.")
        record[field] = parse_scalar(value_text)
    return record


def parse_condition(condition_text: str) -> dict:
    """Parse a single `field = value` condition."""
    pairs = scan_pairs(condition_text)
    if len(pairs) != 1:
        raise ValueError("Некорректное значение: условие where. Попробуйте снова.")

    field, value_text = pairs[0]
    return {field: parse_scalar(value_text)}
