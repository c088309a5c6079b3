"""
Input Validation for the Commission Engine

`is_valid_premium` is a plain predicate. `RequestValidator` checks raw API
payloads before they reach the engine and raises ValueError with clear
messages for any constraint violations.
"""

from decimal import Decimal, InvalidOperation

MAX_MONTHLY_PREMIUM = Decimal("10000")


def is_valid_premium(value) -> bool:
    """True iff 0 < value <= 10000. Never raises."""
    if isinstance(value, bool):
        return False
    try:
        premium = value if isinstance(value, Decimal) else Decimal(str(value))
        return Decimal("0") < premium <= MAX_MONTHLY_PREMIUM
    except (InvalidOperation, TypeError, ValueError):
        return False


class RequestValidator:
    """Validates request payloads for the HTTP entry points."""

    def validate_calculation_request(self, data: dict) -> None:
        """
        Validate a /calculate payload. Raises ValueError if any check fails.

        Only the shape is checked here; whether an insurer is known is the
        engine's decision.
        """
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        insurer = data.get("insurer")
        if not isinstance(insurer, str) or not insurer.strip():
            raise ValueError("insurer is required and must be a non-empty string")

        if "monthly_premium" not in data:
            raise ValueError("monthly_premium is required")
        premium = data["monthly_premium"]
        if isinstance(premium, bool) or not isinstance(premium, (int, float, str)):
            raise ValueError(f"monthly_premium must be a number, got: {premium!r}")
        if not is_valid_premium(premium):
            raise ValueError(
                f"monthly_premium must be greater than 0 and at most {MAX_MONTHLY_PREMIUM}, got: {premium}"
            )

        salesperson = data.get("salesperson")
        if salesperson is not None and not isinstance(salesperson, str):
            raise ValueError(f"salesperson must be a string, got: {salesperson!r}")

    def validate_stats_request(self, data: dict) -> None:
        """Validate a /stats payload. Raises ValueError if any check fails."""
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        calculations = data.get("calculations")
        if not isinstance(calculations, list):
            raise ValueError("calculations is required and must be a list")

        for i, calc in enumerate(calculations):
            if not isinstance(calc, dict):
                raise ValueError(f"Calculation {i} must be an object")
