import logging
import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from credit_pricing import config
from credit_pricing.models.credit_rows import CreditRow
from credit_pricing.services.errors import ValidationError
from credit_pricing.services.row_repository import get_all_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricingCoefficients:
    base_price: float
    price_per_credit_line: float
    price_per_credit_score_point: float


def subscription_price(
    coefficients: PricingCoefficients,
    credit_lines: float,
    credit_score: float,
) -> float:
    return (
        coefficients.base_price
        + coefficients.price_per_credit_line * credit_lines
        + coefficients.price_per_credit_score_point * credit_score
    )


def price_row(row: CreditRow, coefficients: PricingCoefficients, strict: bool = False) -> dict:
    priced = row.to_dict()
    if row.credit_lines is None or row.credit_score is None:
        if strict:
            missing = "creditLines" if row.credit_lines is None else "creditScore"
            raise ValidationError(f"Row {row.id}: {missing} is required for pricing", status_code=422)
        priced["subscriptionPrice"] = None
        return priced

    price = subscription_price(coefficients, row.credit_lines, row.credit_score)
    if not math.isfinite(price):
        if strict:
            raise ValidationError(f"Row {row.id}: subscription price is out of range", status_code=422)
        price = None
    priced["subscriptionPrice"] = price
    return priced


def calculate(
    db: Session,
    coefficients: PricingCoefficients,
    strict: bool | None = None,
) -> list[dict]:
    """
    Price every stored row. Rows missing creditLines or creditScore, or
    whose price overflows to inf, get a None price, or raise ValidationError
    when strict.
    """
    if strict is None:
        strict = config.PRICING_STRICT

    priced = [price_row(row, coefficients, strict=strict) for row in get_all_rows(db)]

    unpriced = sum(1 for item in priced if item["subscriptionPrice"] is None)
    if unpriced:
        logger.warning("PRICING: %s of %s rows were not priced", unpriced, len(priced))
    return priced
