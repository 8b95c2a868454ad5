"""Payment routes. Board and president only, reads included."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from clubhub.api.deps import ClubServices, get_services
from clubhub.auth.capabilities import Action
from clubhub.auth.context import AuthContext
from clubhub.auth.policies import require, require_auth
from clubhub.core.models import (
    MarkPaid,
    MessageResponse,
    Payment,
    PaymentCreate,
    PaymentStatus,
    PaymentUpdate,
)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=list[Payment])
async def list_payments(
    status: PaymentStatus | None = None,
    player_id: int | None = Query(None, alias="playerId"),
    ctx: AuthContext = Depends(require(Action.PAYMENT_READ)),
    services: ClubServices = Depends(get_services),
):
    return await services.payments.list(ctx, status=status, player_id=player_id)


@router.get("/{payment_id}", response_model=Payment)
async def get_payment(
    payment_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.payments.get(ctx, payment_id)


@router.post("", response_model=Payment)
async def create_payment(
    data: PaymentCreate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.payments.create(ctx, data)


@router.put("/{payment_id}", response_model=Payment)
async def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    return await services.payments.update(ctx, payment_id, data)


@router.post("/{payment_id}/pay", response_model=Payment)
async def mark_payment_paid(
    payment_id: int,
    data: MarkPaid | None = None,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    """Settle a payment. Calling it again on a paid entry changes nothing."""
    return await services.payments.mark_paid(ctx, payment_id, data)


@router.delete("/{payment_id}", response_model=MessageResponse)
async def delete_payment(
    payment_id: int,
    ctx: AuthContext = Depends(require_auth),
    services: ClubServices = Depends(get_services),
):
    await services.payments.delete(ctx, payment_id)
    return MessageResponse(message="Payment deleted successfully")
