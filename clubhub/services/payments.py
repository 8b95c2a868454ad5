"""
Payments: the monthly dues ledger. Board and president only.

Status machine:
    pending → paid      (sets paid_date)
    pending → overdue   (due date passed, applied lazily on reads)
    overdue → paid
Nothing moves backwards. Marking a paid entry paid again is a no-op.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable

from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import authorize
from clubhub.core.errors import Conflict, ValidationError
from clubhub.core.models import (
    MarkPaid,
    Payment,
    PaymentCreate,
    PaymentStatus,
    PaymentUpdate,
)
from clubhub.core.utils import utc_now, utc_today
from clubhub.services.base import ResourceService
from clubhub.storage import Collections

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.PENDING: {PaymentStatus.PENDING, PaymentStatus.PAID, PaymentStatus.OVERDUE},
    PaymentStatus.OVERDUE: {PaymentStatus.OVERDUE, PaymentStatus.PAID},
    PaymentStatus.PAID: {PaymentStatus.PAID},
}


class PaymentService(ResourceService[Payment]):
    collection = Collections.PAYMENTS
    model = Payment
    label = "Payment"

    def __init__(self, storage, today: Callable[[], date] = utc_today):
        super().__init__(storage)
        self._today = today

    async def list(
        self,
        actor: AuthContext,
        status: PaymentStatus | None = None,
        player_id: int | None = None,
    ) -> list[Payment]:
        """Latest due date first."""
        authorize(actor, Action.PAYMENT_READ)
        await self.refresh_overdue()

        filters: dict[str, Any] = {}
        if status is not None:
            filters["status"] = status.value
        if player_id is not None:
            filters["player_id"] = player_id
        payments = await self._query(filters or None)
        return sorted(payments, key=lambda p: (p.due_date, p.id), reverse=True)

    async def get(self, actor: AuthContext, payment_id: int) -> Payment:
        payment = await self.load(payment_id)
        authorize(actor, Action.PAYMENT_READ, payment)
        if self._is_late(payment):
            payment = await self._update(payment_id, {"status": PaymentStatus.OVERDUE})
        return payment

    async def create(self, actor: AuthContext, data: PaymentCreate) -> Payment:
        authorize(actor, Action.PAYMENT_CREATE)
        if not await self.storage.get(Collections.PLAYERS, data.player_id):
            raise ValidationError(f"Unknown player {data.player_id}")

        record = data.model_dump()
        record["status"] = data.status or PaymentStatus.PENDING
        if record["status"] == PaymentStatus.OVERDUE:
            self._check_overdue(data.due_date)
        if record["status"] == PaymentStatus.PAID:
            record["paid_date"] = data.paid_date or self._today()
        elif data.paid_date is not None:
            raise ValidationError("paidDate requires status paid")

        payment = await self._insert({**record, "created_at": utc_now()})
        logger.info(
            f"Payment {payment.id} ({payment.month}/{payment.year}) created "
            f"for player {payment.player_id}"
        )
        return payment

    async def update(self, actor: AuthContext, payment_id: int, data: PaymentUpdate) -> Payment:
        payment = await self.load(payment_id)
        authorize(actor, Action.PAYMENT_UPDATE, payment)

        updates = data.model_dump(exclude_unset=True)
        target = updates.get("status") or payment.status
        if "status" in updates and updates["status"] is None:
            raise ValidationError("status cannot be null")
        if target not in ALLOWED_TRANSITIONS[payment.status]:
            raise Conflict(
                f"Cannot move payment from {payment.status.value} to {target.value}"
            )

        if target == PaymentStatus.PAID:
            if "paid_date" in updates and updates["paid_date"] is None:
                raise ValidationError("paidDate required for paid status")
            if payment.status != PaymentStatus.PAID and not updates.get("paid_date"):
                updates["paid_date"] = self._today()
        elif target == PaymentStatus.OVERDUE:
            self._check_overdue(updates.get("due_date") or payment.due_date)
            if updates.get("paid_date") is not None:
                raise ValidationError("paidDate requires status paid")
        elif updates.get("paid_date") is not None:
            raise ValidationError("paidDate requires status paid")

        self._merged(payment, updates)
        return await self._update(payment_id, updates)

    async def mark_paid(
        self,
        actor: AuthContext,
        payment_id: int,
        data: MarkPaid | None = None,
    ) -> Payment:
        """
        Settle a payment.

        Idempotent: an already paid payment is returned unchanged, so
        repeated or concurrent calls converge on the same final state.
        """
        payment = await self.load(payment_id)
        authorize(actor, Action.PAYMENT_UPDATE, payment)
        if payment.status == PaymentStatus.PAID:
            return payment

        data = data or MarkPaid()
        updates: dict[str, Any] = {
            "status": PaymentStatus.PAID,
            "paid_date": data.paid_date or self._today(),
        }
        if data.method is not None:
            updates["method"] = data.method
        logger.info(f"Payment {payment_id} marked paid by user {actor.user_id}")
        return await self._update(payment_id, updates)

    async def delete(self, actor: AuthContext, payment_id: int) -> None:
        payment = await self.load(payment_id)
        authorize(actor, Action.PAYMENT_DELETE, payment)
        await self._delete(payment_id)

    async def refresh_overdue(self, today: date | None = None) -> int:
        """Flip pending payments past their due date to overdue. Returns count."""
        today = today or self._today()
        pending = await self._query({"status": PaymentStatus.PENDING.value})
        flipped = 0
        for payment in pending:
            if payment.due_date < today:
                await self._update(payment.id, {"status": PaymentStatus.OVERDUE})
                flipped += 1
        if flipped:
            logger.info(f"{flipped} payment(s) became overdue")
        return flipped

    def _is_late(self, payment: Payment) -> bool:
        return payment.status == PaymentStatus.PENDING and payment.due_date < self._today()

    def _check_overdue(self, due_date: date) -> None:
        if due_date >= self._today():
            raise Conflict(f"Payment due {due_date.isoformat()} cannot be overdue yet")
