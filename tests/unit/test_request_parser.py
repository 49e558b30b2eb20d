"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from statutax.backend.services.request_parser import parse_calculation_payload


def test_parse_payload_returns_object(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/levies", method="POST", json={"subtotal": "1000"}
    ):
        payload = parse_calculation_payload(request)

    assert payload == {"subtotal": "1000"}


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/levies",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest, match="must be an object"):
            parse_calculation_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/levies",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_calculation_payload(request)
