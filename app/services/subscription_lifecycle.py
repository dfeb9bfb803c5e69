"""
SEA Catering API - Subscription Lifecycle Service.

Create, edit, pause, resume and cancel meal subscriptions.

States and legal transitions:
- active    -> paused (pause), cancelled (cancel)
- paused    -> active (resume), cancelled (cancel)
- cancelled -> nothing (terminal)

Every operation is one transaction; the subscription row and its dependent
rows (meal types, delivery days, pause records) are written together or not
at all. Status changes are compare-and-swap updates on the expected status,
so two concurrent pauses cannot both succeed. Transient storage errors
(timeouts, dropped connections) retry the whole transaction with
exponential backoff.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar
import logging

from sqlalchemy.orm import Session

from app.database import transaction
from app.models.meal_plan import MealPlan
from app.models.subscription import (
    DayOfWeek,
    MealType,
    PauseRecord,
    Subscription,
    SubscriptionStatus,
)
from app.models.user import User
from app.services import delivery_schedule, meal_selection, pause_ledger
from app.services.pricing import compute_price, price_matches
from app.utils.errors import ConflictError, NotFoundError, ValidationError
from app.utils.retry import run_with_retry
from app.utils.security import contains_xss, is_valid_phone, sanitize_input
from settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ALLERGIES_LENGTH = 500


class SubscriptionLifecycle:
    """
    Subscription state machine bound to one database session.

    Args:
        db: SQLAlchemy session for the current request.
        today: Clock returning the current local date.
        retry_attempts: Attempts per operation on transient storage errors.
        retry_base_delay: First backoff delay in seconds, doubled per retry.
        sleep: Sleep function used between retries.
    """

    def __init__(
        self,
        db: Session,
        today: Optional[Callable[[], date]] = None,
        retry_attempts: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.db = db
        self._today = today or date.today
        self.retry_attempts = retry_attempts or settings.DB_RETRY_ATTEMPTS
        self.retry_base_delay = (
            settings.DB_RETRY_BASE_DELAY if retry_base_delay is None else retry_base_delay
        )
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def today(self) -> date:
        return self._today()

    def _run(self, description: str, unit: Callable[[], T]) -> T:
        """Run ``unit`` in a transaction, retrying transient storage failures."""

        def attempt() -> T:
            with transaction(self.db):
                return unit()

        return run_with_retry(
            attempt,
            max_attempts=self.retry_attempts,
            base_delay=self.retry_base_delay,
            description=description,
            sleep=self._sleep,
        )

    def _swap_status(
        self,
        subscription: Subscription,
        expected: Sequence[SubscriptionStatus],
        new_status: SubscriptionStatus,
    ) -> None:
        """Set the status only if it still holds one of ``expected``."""
        updated = (
            self.db.query(Subscription)
            .filter(
                Subscription.id == subscription.id,
                Subscription.status.in_([status.value for status in expected]),
            )
            .update(
                {
                    Subscription.status: new_status.value,
                    Subscription.updated_at: datetime.now(timezone.utc),
                },
                synchronize_session="fetch",
            )
        )
        if updated != 1:
            raise ConflictError(
                "Subscription was modified by another request, please retry",
                code="concurrent_modification",
            )

    def _load_owned(self, subscription_id: int, user_id: int, lock: bool = False) -> Subscription:
        query = self.db.query(Subscription).filter(
            Subscription.id == subscription_id,
            Subscription.user_id == user_id,
        )
        if lock:
            query = query.with_for_update()
        subscription = query.first()
        if subscription is None:
            raise NotFoundError("Subscription not found", code="subscription_not_found")
        return subscription

    def _validate_selection(
        self,
        plan_id: Optional[int],
        meal_type_tokens: Iterable[str],
        delivery_day_tokens: Iterable[str],
        submitted_price: Optional[float],
    ):
        """Check plan, meal types, delivery days and price; return the parsed selection."""
        if not plan_id:
            raise ValidationError("Meal plan is required", code="plan_required")

        meal_types = meal_selection.parse_meal_types(meal_type_tokens)
        days = delivery_schedule.parse_delivery_days(delivery_day_tokens)

        plan = self.db.get(MealPlan, plan_id)
        if plan is None:
            raise ValidationError("Invalid meal plan", code="invalid_plan")

        expected_price = compute_price(plan.price_per_meal, len(meal_types), len(days))

        logger.debug(
            f"Price check: plan={plan.price_per_meal} meal_types={len(meal_types)} "
            f"days={len(days)} expected={expected_price} received={submitted_price}"
        )

        if submitted_price is None:
            raise ValidationError("Total price is required", code="price_required")
        if not price_matches(submitted_price, expected_price):
            raise ValidationError(
                f"Price mismatch. Expected: {round(expected_price, 2)}, Received: {submitted_price}",
                code="price_mismatch",
            )

        return plan, meal_types, days, expected_price

    @staticmethod
    def _clean_allergies(allergies: Optional[str]) -> Optional[str]:
        if not allergies:
            return None
        if contains_xss(allergies):
            raise ValidationError("Invalid characters detected in allergies", code="invalid_allergies")
        cleaned = sanitize_input(allergies, "allergies").strip()
        if len(cleaned) > MAX_ALLERGIES_LENGTH:
            raise ValidationError(
                f"Allergies cannot exceed {MAX_ALLERGIES_LENGTH} characters",
                code="invalid_allergies",
            )
        return cleaned or None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_owned(self, subscription_id: int, user_id: int) -> Subscription:
        """Fetch a subscription owned by ``user_id`` or raise NotFoundError."""
        return self._load_owned(subscription_id, user_id)

    def list_for_user(self, user_id: int) -> List[Subscription]:
        return (
            self.db.query(Subscription)
            .filter(Subscription.user_id == user_id)
            .order_by(Subscription.id)
            .all()
        )

    def describe(self, subscription: Subscription) -> Dict[str, Any]:
        """Flatten a subscription with its selections and pause state."""
        status = pause_ledger.pause_status(self.db, subscription)
        plan = subscription.meal_plan
        return {
            "id": subscription.id,
            "user_id": subscription.user_id,
            "meal_plan_id": subscription.meal_plan_id,
            "meal_plan_name": plan.name if plan else None,
            "meal_plan_price": plan.price_per_meal if plan else None,
            "meal_types": [
                MealType(code).token
                for code in meal_selection.get_meal_types(self.db, subscription)
            ],
            "delivery_days": [
                DayOfWeek(code).token
                for code in delivery_schedule.get_delivery_days(self.db, subscription.id)
            ],
            "allergies": meal_selection.get_allergies(subscription),
            "total_price": subscription.total_price,
            "status": subscription.status,
            "is_paused": status.is_paused,
            "paused_until": status.paused_until,
            "created_at": subscription.created_at,
        }

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def create(
        self,
        user_id: int,
        plan_id: Optional[int],
        meal_types: Iterable[str],
        delivery_days: Iterable[str],
        submitted_price: Optional[float],
        allergies: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> Subscription:
        """
        Create an active subscription.

        Raises:
            ValidationError: Bad plan, selections, phone number or price.
            NotFoundError: Unknown user.
        """
        meal_type_tokens = list(meal_types or [])
        day_tokens = list(delivery_days or [])
        clean_allergies = self._clean_allergies(allergies)
        phone = sanitize_input(phone_number, "phone") if phone_number else None
        if phone and not is_valid_phone(phone):
            raise ValidationError("Please enter a valid phone number (10-15 digits)", code="invalid_phone")

        def unit() -> Subscription:
            user = self.db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found", code="user_not_found")

            plan, parsed_meal_types, days, price = self._validate_selection(
                plan_id, meal_type_tokens, day_tokens, submitted_price
            )

            if phone and phone != user.phone_number:
                user.phone_number = phone

            subscription = Subscription(
                user_id=user_id,
                meal_plan_id=plan.id,
                meal_type=int(parsed_meal_types[0]),
                total_price=price,
                allergies=clean_allergies,
                status=SubscriptionStatus.ACTIVE.value,
            )
            self.db.add(subscription)
            self.db.flush()

            meal_selection.replace_meal_types(self.db, subscription.id, parsed_meal_types)
            delivery_schedule.replace_delivery_days(self.db, subscription.id, days)
            return subscription

        subscription = self._run("create subscription", unit)
        self.db.expire(subscription)
        logger.info(f"Created subscription {subscription.id} for user {user_id}")
        return subscription

    def edit(
        self,
        subscription_id: int,
        user_id: int,
        plan_id: Optional[int],
        meal_types: Iterable[str],
        delivery_days: Iterable[str],
        submitted_price: Optional[float],
        allergies: Optional[str] = None,
    ) -> Subscription:
        """
        Change plan, meal types, delivery days and allergies.

        Active and paused subscriptions may be edited; cancelled ones may not.
        The price is recomputed and both selection sets are fully replaced.
        """
        meal_type_tokens = list(meal_types or [])
        day_tokens = list(delivery_days or [])
        clean_allergies = self._clean_allergies(allergies)

        def unit() -> Subscription:
            subscription = self._load_owned(subscription_id, user_id, lock=True)
            if subscription.status == SubscriptionStatus.CANCELLED.value:
                raise ValidationError(
                    "Cancelled subscriptions cannot be edited",
                    code="subscription_cancelled",
                )

            plan, parsed_meal_types, days, price = self._validate_selection(
                plan_id, meal_type_tokens, day_tokens, submitted_price
            )

            subscription.meal_plan_id = plan.id
            subscription.meal_type = int(parsed_meal_types[0])
            subscription.total_price = price
            subscription.allergies = clean_allergies
            self.db.flush()

            meal_selection.replace_meal_types(self.db, subscription.id, parsed_meal_types)
            delivery_schedule.replace_delivery_days(self.db, subscription.id, days)
            return subscription

        subscription = self._run("edit subscription", unit)
        self.db.expire(subscription)
        logger.info(f"Updated subscription {subscription_id} for user {user_id}")
        return subscription

    def pause(
        self,
        subscription_id: int,
        user_id: int,
        start_date: Optional[date],
        end_date: Optional[date] = None,
    ) -> PauseRecord:
        """
        Pause an active subscription from ``start_date`` (at least tomorrow)
        until ``end_date`` or indefinitely.
        """
        today = self.today()

        if start_date is None:
            raise ValidationError("Start date is required", code="start_date_required")
        if start_date <= today:
            raise ValidationError("Start date must be after today", code="start_date_not_future")
        if end_date is not None and end_date <= start_date:
            raise ValidationError("End date must be after start date", code="end_date_before_start")

        def unit() -> PauseRecord:
            subscription = self._load_owned(subscription_id, user_id, lock=True)
            if subscription.status != SubscriptionStatus.ACTIVE.value:
                raise ValidationError(
                    "Only active subscriptions can be paused",
                    code="subscription_not_active",
                )
            if pause_ledger.has_open_pause(self.db, subscription.id, today):
                raise ValidationError("Subscription is already paused", code="already_paused")

            self._swap_status(subscription, [SubscriptionStatus.ACTIVE], SubscriptionStatus.PAUSED)
            return pause_ledger.open_pause(self.db, subscription.id, start_date, end_date)

        record = self._run("pause subscription", unit)
        logger.info(
            f"Paused subscription {subscription_id} for user {user_id} "
            f"from {start_date} until {end_date or 'further notice'}"
        )
        return record

    def resume(self, subscription_id: int, user_id: int) -> PauseRecord:
        """
        Resume a paused subscription, closing its latest pause record today.
        """
        today = self.today()

        def unit() -> PauseRecord:
            subscription = self._load_owned(subscription_id, user_id, lock=True)
            if subscription.status != SubscriptionStatus.PAUSED.value:
                raise ValidationError(
                    "Only paused subscriptions can be resumed",
                    code="subscription_not_paused",
                )

            record = pause_ledger.close_latest_pause(self.db, subscription.id, today)
            self._swap_status(subscription, [SubscriptionStatus.PAUSED], SubscriptionStatus.ACTIVE)
            return record

        record = self._run("resume subscription", unit)
        logger.info(f"Resumed subscription {subscription_id} for user {user_id}")
        return record

    def cancel(self, subscription_id: int, user_id: int) -> Subscription:
        """Cancel an active or paused subscription. Cancelling twice fails."""

        def unit() -> Subscription:
            subscription = self._load_owned(subscription_id, user_id, lock=True)
            if subscription.status == SubscriptionStatus.CANCELLED.value:
                raise ValidationError("Subscription is already cancelled", code="already_cancelled")

            self._swap_status(
                subscription,
                [SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED],
                SubscriptionStatus.CANCELLED,
            )
            return subscription

        subscription = self._run("cancel subscription", unit)
        self.db.expire(subscription)
        logger.info(f"Cancelled subscription {subscription_id} for user {user_id}")
        return subscription
