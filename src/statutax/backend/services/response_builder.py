"""Utilities for serialising calculation responses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


def serialise_result(value: Any) -> Any:
    """Convert result records into JSON-ready structures.

    Money stays exact: ``Decimal`` values become strings such as ``"150.00"``.
    """

    if value is None:
        return None

    if hasattr(value, "as_dict"):
        return serialise_result(value.as_dict())

    if isinstance(value, Decimal):
        return str(value)

    if isinstance(value, Mapping):
        return {key: serialise_result(item) for key, item in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return [serialise_result(item) for item in value]

    return value


def build_calculation_response(payload: Any, status: int = 200) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``payload``."""

    return jsonify(serialise_result(payload)), status
