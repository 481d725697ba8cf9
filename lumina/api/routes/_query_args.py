# lumina/api/routes/_query_args.py
from flask import request

from lumina.core.exceptions import ValidationError


def optional_int_arg(name: str) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"Query parameter '{name}' must be an integer.") from e


def int_arg(name: str, default: int, *, minimum: int, maximum: int | None = None) -> int:
    value = optional_int_arg(name)
    if value is None:
        value = default
    value = max(minimum, value)
    if maximum is not None:
        value = min(value, maximum)
    return value
