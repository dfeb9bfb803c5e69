"""
SEA Catering API - Meal-Type Selection.

Selected meal types live in ``subscription_meal_types``, one row per type.
Older rows kept every meal type inside a JSON envelope in the ``allergies``
column ({"allergies": ..., "meal_types": [...]}) because the subscription
table only had room for one; those envelopes are still understood on read
and converted by ``scripts/migrate_meal_type_envelopes.py``.
"""

import json
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.subscription import MealType, Subscription, SubscriptionMealType
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)

MEAL_TYPE_MAP = {meal_type.token: meal_type for meal_type in MealType}


def parse_meal_types(tokens: Iterable[str]) -> List[MealType]:
    """
    Map meal-type tokens (breakfast, lunch, dinner) to codes.

    Raises:
        ValidationError: On an unknown token or an empty selection.
    """
    meal_types: List[MealType] = []
    for token in tokens or []:
        meal_type = MEAL_TYPE_MAP.get(str(token).strip().lower())
        if meal_type is None:
            raise ValidationError(f"Invalid meal type: {token}", code="invalid_meal_type")
        if meal_type not in meal_types:
            meal_types.append(meal_type)

    if not meal_types:
        raise ValidationError("At least one meal type is required", code="meal_types_required")
    return meal_types


def replace_meal_types(db: Session, subscription_id: int, meal_types: Iterable[int]) -> None:
    """Delete-then-insert the meal-type rows inside the caller's transaction."""
    db.query(SubscriptionMealType).filter(
        SubscriptionMealType.subscription_id == subscription_id
    ).delete(synchronize_session=False)

    db.add_all(
        SubscriptionMealType(subscription_id=subscription_id, meal_type=int(meal_type))
        for meal_type in meal_types
    )
    db.flush()


def decode_legacy_envelope(raw: Optional[str]) -> Tuple[Optional[str], Optional[List[int]]]:
    """
    Split a legacy ``allergies`` value into (allergy text, meal-type codes).

    Plain text comes back unchanged with ``None`` meal types.

    Example:
        >>> decode_legacy_envelope('{"allergies": "nuts", "meal_types": [0, 2]}')
        ('nuts', [0, 2])
        >>> decode_legacy_envelope("shellfish")
        ('shellfish', None)
    """
    if not raw:
        return raw, None
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return raw, None

    if not isinstance(parsed, dict) or not isinstance(parsed.get("meal_types"), list):
        return raw, None

    codes = []
    for code in parsed["meal_types"]:
        try:
            codes.append(int(MealType(int(code))))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unknown meal type code in legacy envelope: {code!r}")
    return parsed.get("allergies"), codes


def get_meal_types(db: Session, subscription: Subscription) -> List[int]:
    """
    Return the meal-type codes of a subscription.

    Falls back to the legacy envelope, then to the single ``meal_type``
    column, for rows written before the relation existed.
    """
    rows = (
        db.query(SubscriptionMealType.meal_type)
        .filter(SubscriptionMealType.subscription_id == subscription.id)
        .order_by(SubscriptionMealType.id)
        .all()
    )
    if rows:
        return [row.meal_type for row in rows]

    _, legacy_codes = decode_legacy_envelope(subscription.allergies)
    if legacy_codes:
        return legacy_codes
    return [subscription.meal_type]


def get_allergies(subscription: Subscription) -> Optional[str]:
    """Allergy note with any legacy envelope unwrapped."""
    allergies, _ = decode_legacy_envelope(subscription.allergies)
    return allergies
