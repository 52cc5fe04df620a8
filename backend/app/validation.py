"""
Floreria Backend — Input Validation & Coercion
================================================

What:  Helpers shared by the request schemas and the record services.
How:   - missing_fields(): which required fields a body lacks, in declared order
       - clean_text(): trims strings (stringifying other scalars first)
       - coerce_number(): permissive float parsing

Permissive numeric coercion:
    The mobile client has always been able to send "19.99", 19.99 or even
    "abc" for amounts. Anything float() cannot parse, and NaN/inf, is stored
    as 0 instead of being rejected. Negative numbers are still refused by the
    schemas because amounts are never negative.
"""

import math
from typing import Any, Iterable, List, Mapping, Optional

MISSING_FIELDS_MESSAGE = "Faltan campos requeridos: "
BLANK_FIELDS_MESSAGE = "Los campos no pueden estar vacíos: "
NO_FIELDS_MESSAGE = "No hay campos para actualizar"
FIELD_SEPARATOR = ", "


def is_blank(value: Any) -> bool:
    """None and whitespace-only strings carry no value."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    """
    Return the required fields absent from `payload`, preserving the order
    of `required`.

    A key that is present but null or blank counts as absent.

    >>> missing_fields({"valor": 10}, ["titulo", "valor", "categoria"])
    ['titulo', 'categoria']
    """
    return [field for field in required if is_blank(payload.get(field))]


def join_fields(fields: Iterable[str]) -> str:
    return FIELD_SEPARATOR.join(fields)


def clean_text(value: Any) -> Optional[str]:
    """Trim a string field. Numbers and other scalars are stringified first."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def coerce_number(value: Any) -> Optional[float]:
    """
    Parse a numeric field as float; unparsable input becomes 0.0.

    None passes through so optional fields stay "absent".
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number
