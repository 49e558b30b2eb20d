"""REST endpoints for invoice and cash-sale levies."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from statutax.backend.app.models import LevyRequest
from statutax.backend.services import compute_document_totals, compute_tax_breakdown
from statutax.backend.services.request_parser import parse_calculation_payload
from statutax.backend.services.response_builder import build_calculation_response

from .config import active_configuration

blueprint = Blueprint("levies", __name__, url_prefix="/api/v1")


@blueprint.post("/levies")
def create_levy_breakdown() -> tuple[Any, int]:
    """Return the itemised levies for a subtotal or a list of line items."""

    levy_request = LevyRequest.model_validate(parse_calculation_payload(request))
    tax_config = levy_request.tax if levy_request.tax is not None else active_configuration().tax

    if levy_request.line_items is not None:
        result = compute_document_totals(
            [item.as_mapping() for item in levy_request.line_items], tax_config
        )
    else:
        result = compute_tax_breakdown(levy_request.subtotal, tax_config)

    return build_calculation_response(result)
