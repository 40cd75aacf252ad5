"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from projection_engine.core.formatting import CURRENCY_SYMBOLS, NumberFormat, format_currency, format_tenure
from projection_engine.core.loan import affordable_principal, required_tenure
from projection_engine.core.recurring import required_recurring_contribution
from projection_engine.core.single import required_deposit
from projection_engine.domain.errors import DomainError
from projection_engine.domain.registry import get_calculator, list_calculators
from projection_engine.schemas.inverse import (
    AffordablePrincipalRequest,
    InverseResponse,
    RequiredContributionRequest,
    RequiredDepositRequest,
    RequiredTenureRequest,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

SUPPORTED_LOCALES = ("en-IN", "en-US", "en-GB")


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("Rejected %s: %d validation error(s)", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(DomainError)
def _handle_domain_error(exc: DomainError):
    logger.info("Rejected %s: %s", request.path, exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


def _number_format() -> NumberFormat:
    """Read the display currency/locale from the query string."""
    currency = request.args.get("currency", current_app.config["DEFAULT_CURRENCY"]).upper()
    locale = request.args.get("locale", current_app.config["DEFAULT_LOCALE"])
    if currency not in CURRENCY_SYMBOLS:
        raise DomainError(f"unsupported currency {currency!r}")
    if locale not in SUPPORTED_LOCALES:
        raise DomainError(f"unsupported locale {locale!r}")
    return NumberFormat(currency=currency, locale=locale)


def _payload() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=False)
    if not isinstance(payload, dict):
        raise DomainError("request body must be a JSON object")
    return payload


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify({"status": "ok", "calculators": [c["id"] for c in list_calculators()]})


@api_bp.get("/calculators")
def calculators() -> Any:
    return jsonify(list_calculators())


@api_bp.post("/calc/<calculator_id>")
def calculate(calculator_id: str) -> Any:
    """Run one calculator on the posted input record."""
    calculator = get_calculator(calculator_id)
    if calculator is None:
        logger.warning("Unknown calculator requested: %s", calculator_id)
        return jsonify({"detail": f"unknown calculator {calculator_id!r}"}), HTTPStatus.NOT_FOUND

    result = calculator.run(_payload(), _number_format())
    return jsonify(result.model_dump())


@api_bp.post("/inverse/affordable-principal")
def inverse_affordable_principal() -> Any:
    payload = AffordablePrincipalRequest.model_validate(_payload())
    value = affordable_principal(payload.targetEmi, payload.annualRatePercent, payload.months)
    response = InverseResponse(value=value, formatted=format_currency(value, _number_format()))
    return jsonify(response.model_dump())


@api_bp.post("/inverse/required-tenure")
def inverse_required_tenure() -> Any:
    payload = RequiredTenureRequest.model_validate(_payload())
    months = required_tenure(payload.principal, payload.emi, payload.annualRatePercent)
    response = InverseResponse(value=months, formatted=format_tenure(months))
    return jsonify(response.model_dump())


@api_bp.post("/inverse/required-contribution")
def inverse_required_contribution() -> Any:
    payload = RequiredContributionRequest.model_validate(_payload())
    value = required_recurring_contribution(payload.targetAmount, payload.annualRatePercent, payload.years)
    response = InverseResponse(value=value, formatted=format_currency(value, _number_format()))
    return jsonify(response.model_dump())


@api_bp.post("/inverse/required-deposit")
def inverse_required_deposit() -> Any:
    payload = RequiredDepositRequest.model_validate(_payload())
    value = required_deposit(
        payload.targetAmount,
        payload.annualRatePercent,
        payload.tenure,
        payload.tenureUnit,
        payload.compoundingFrequency,
    )
    response = InverseResponse(value=value, formatted=format_currency(value, _number_format()))
    return jsonify(response.model_dump())
