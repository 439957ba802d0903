"""Promotion evaluation.

A promotion carries optional rules, stored as JSON, such as
``{"minimum_amount": 100, "allowed_currencies": ["ARS"], "discount_percent": 10}``.
Non-JSON rule text is accepted and treated as informational.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class Purchase:
    """Purchase a promotion is applied to."""

    amount: float
    currency: str
    items: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class RuleEvaluation:
    """Outcome of evaluating a promotion's eligibility rules."""

    eligible: bool
    reason: str | None = None
    applied_rules: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Benefit:
    """Discount granted by a promotion."""

    discount_amount: float
    final_amount: float
    benefit_type: str


@dataclass(frozen=True)
class PromotionApplication:
    """Result of applying a promotion to a purchase."""

    applied: bool
    discount_amount: float
    final_amount: float
    reason: str | None = None
    applied_rules: list[str] = field(default_factory=list)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def parse_rules(rules: Any) -> dict[str, Any] | None:
    """Parse stored promotion rules.

    Returns:
        None when there are no rules, the decoded mapping for JSON rules, and
        ``{"text": rules}`` for plain-text rules.
    """
    if rules is None or rules == "":
        return None
    if isinstance(rules, dict):
        return rules
    try:
        parsed = json.loads(rules)
    except (TypeError, ValueError):
        return {"text": str(rules)}
    return parsed if isinstance(parsed, dict) else {"text": str(rules)}


def is_promotion_active(promotion: Any, now: datetime | None = None) -> bool:
    """Check dates, the active flag and soft-delete status of a promotion."""
    if promotion is None or getattr(promotion, "deleted_at", None) is not None:
        return False
    if not getattr(promotion, "is_active", True):
        return False
    now = _as_utc(now or datetime.now(timezone.utc))
    starts_at = getattr(promotion, "starts_at", None)
    ends_at = getattr(promotion, "ends_at", None)
    if starts_at is not None and _as_utc(starts_at) > now:
        return False
    if ends_at is not None and _as_utc(ends_at) < now:
        return False
    return True


def evaluate_rules(rules: Any, client_id: str, purchase: Purchase) -> RuleEvaluation:
    """Check a purchase against a promotion's eligibility rules."""
    parsed = parse_rules(rules)
    if parsed is None:
        return RuleEvaluation(eligible=True, applied_rules=["DEFAULT_ELIGIBLE"])

    applied: list[str] = []
    try:
        minimum = parsed.get("minimum_amount")
        if minimum is not None:
            if purchase.amount < float(minimum):
                return RuleEvaluation(eligible=False, reason="MINIMUM_AMOUNT_NOT_MET")
            applied.append("MINIMUM_AMOUNT_CHECK")

        maximum = parsed.get("maximum_amount")
        if maximum is not None:
            if purchase.amount > float(maximum):
                return RuleEvaluation(eligible=False, reason="MAXIMUM_AMOUNT_EXCEEDED")
            applied.append("MAXIMUM_AMOUNT_CHECK")

        currencies = parsed.get("allowed_currencies")
        if currencies is not None:
            if purchase.currency not in currencies:
                return RuleEvaluation(eligible=False, reason="CURRENCY_NOT_ALLOWED")
            applied.append("CURRENCY_CHECK")

        if client_id in (parsed.get("excluded_clients") or []):
            return RuleEvaluation(eligible=False, reason="CLIENT_EXCLUDED")

        if isinstance(parsed.get("text"), str):
            applied.append("TEXT_RULES_APPLIED")
    except (TypeError, ValueError):
        return RuleEvaluation(eligible=False, reason="RULE_EVALUATION_ERROR")

    return RuleEvaluation(eligible=True, applied_rules=applied)


def calculate_benefit(rules: Any, amount: float) -> Benefit:
    """Compute the discount a promotion grants on an amount.

    Percentage discounts take precedence over fixed ones. The discount never
    exceeds the amount and the final amount never drops below zero.
    """
    parsed = parse_rules(rules) or {}
    discount = 0.0
    benefit_type = "NONE"

    try:
        if parsed.get("discount_percent"):
            discount = amount * float(parsed["discount_percent"]) / 100
            benefit_type = "PERCENTAGE_DISCOUNT"
        elif parsed.get("discount_amount"):
            discount = float(parsed["discount_amount"])
            benefit_type = "FIXED_DISCOUNT"
    except (TypeError, ValueError):
        discount = 0.0
        benefit_type = "NONE"

    discount = round(min(max(discount, 0.0), amount), 2)
    return Benefit(
        discount_amount=discount,
        final_amount=round(max(0.0, amount - discount), 2),
        benefit_type=benefit_type,
    )


def apply_promotion(
    promotion: Any,
    client_id: str,
    purchase: Purchase,
    now: datetime | None = None,
) -> PromotionApplication:
    """Apply a promotion to a purchase.

    Args:
        promotion: The promotion record (or None).
        client_id: The purchasing client.
        purchase: The purchase.
        now: Reference time, defaults to the current UTC time.

    Returns:
        The application result; ``applied`` is False with a reason when the
        promotion is missing, inactive or the purchase is not eligible.
    """
    if promotion is None:
        return PromotionApplication(False, 0.0, purchase.amount, reason="PROMOTION_NOT_FOUND")
    if not is_promotion_active(promotion, now):
        return PromotionApplication(False, 0.0, purchase.amount, reason="PROMOTION_NOT_ACTIVE")

    evaluation = evaluate_rules(promotion.rules, client_id, purchase)
    if not evaluation.eligible:
        return PromotionApplication(False, 0.0, purchase.amount, reason=evaluation.reason)

    benefit = calculate_benefit(promotion.rules, purchase.amount)
    return PromotionApplication(
        applied=True,
        discount_amount=benefit.discount_amount,
        final_amount=benefit.final_amount,
        applied_rules=evaluation.applied_rules,
    )
