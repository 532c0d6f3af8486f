"""
Token balance service.

The balance stored here is authoritative: spends are conditional atomic
decrements, so two concurrent requests can never take the balance below
zero. Clients only pre-check affordability against a cached balance.
"""
import time
from datetime import timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from sports_reels.core.errors import (
    InsufficientTokensError,
    NotFoundError,
    ValidationError,
)
from sports_reels.core.logging import get_logger
from sports_reels.core.status import TOKEN_PURCHASE_FLOW
from sports_reels.core.token_costs import (
    ACTION_DESCRIPTIONS,
    WELCOME_BONUS_MONTHS,
    WELCOME_BONUS_TOKENS,
    cost_of,
    costs_for_role,
)
from sports_reels.db.models.tokens import TokenBalance, TokenPack, TokenPurchase, TokenTransaction

logger = get_logger(__name__)

DEFAULT_TOKEN_PACKS = [
    {'name': 'Starter', 'tokens': 50, 'price_cents': 999, 'description': 'Perfect for trying out the platform', 'sort_order': 1},
    {'name': 'Standard', 'tokens': 100, 'price_cents': 1799, 'description': 'Best for regular scouting activity', 'sort_order': 2},
    {'name': 'Pro', 'tokens': 150, 'price_cents': 2499, 'description': 'For active scouts and agents', 'sort_order': 3},
    {'name': 'Enterprise', 'tokens': 200, 'price_cents': 2999, 'description': 'Maximum value for power users', 'sort_order': 4},
]


def get_or_create_balance(user) -> TokenBalance:
    """
    Get the user's balance, creating it on first access.

    New non-embassy balances start with the welcome bonus.
    """
    with transaction.atomic():
        balance, created = TokenBalance.objects.get_or_create(user=user)
        if created and user.role != 'embassy':
            TokenBalance.objects.filter(pk=balance.pk).update(
                balance=F('balance') + WELCOME_BONUS_TOKENS,
                lifetime_purchased=F('lifetime_purchased') + WELCOME_BONUS_TOKENS,
            )
            balance.refresh_from_db()
            TokenTransaction.objects.create(
                user=user,
                type=TokenTransaction.Type.CREDIT,
                amount=WELCOME_BONUS_TOKENS,
                action='welcome_bonus',
                description=f"Welcome bonus - {WELCOME_BONUS_TOKENS} free tokens",
                balance_after=balance.balance,
                expires_at=timezone.now() + timedelta(days=30 * WELCOME_BONUS_MONTHS),
            )
            logger.info(f"Granted welcome bonus to user {user.id}")
    return balance


def spend_tokens(
    user,
    action: str,
    player_id: Optional[UUID] = None,
    video_id: Optional[UUID] = None,
) -> Dict[str, Any]:
    """
    Charge the cost of an action to the user's balance.

    Args:
        user: Spending user; the role selects the cost table
        action: Action key from the role's cost table
        player_id: Optional player the action applies to
        video_id: Optional video the action applies to

    Returns:
        Dict with success, new_balance, cost, action

    Raises:
        ValidationError: if the action is not available to the role
        InsufficientTokensError: if there is no balance or it is too low
    """
    cost = cost_of(user.role, action)
    if cost is None:
        raise ValidationError(f'Invalid action "{action}" for role "{user.role}"')

    with transaction.atomic():
        balance = TokenBalance.objects.select_for_update().filter(user=user).first()
        if balance is None:
            raise InsufficientTokensError(current_balance=0, required=cost, message='No token balance found')

        updated = TokenBalance.objects.filter(pk=balance.pk, balance__gte=cost).update(
            balance=F('balance') - cost,
            lifetime_spent=F('lifetime_spent') + cost,
        )
        if not updated:
            balance.refresh_from_db()
            logger.warning(
                f"User {user.id} cannot afford {action}: balance {balance.balance}, cost {cost}"
            )
            raise InsufficientTokensError(current_balance=balance.balance, required=cost)

        balance.refresh_from_db()
        TokenTransaction.objects.create(
            user=user,
            type=TokenTransaction.Type.DEBIT,
            amount=-cost,
            action=action,
            description=ACTION_DESCRIPTIONS.get(action, action),
            player_id=player_id,
            video_id=video_id,
            balance_after=balance.balance,
        )

    logger.info(f"User {user.id} spent {cost} tokens on {action}, balance {balance.balance}")
    return {
        'success': True,
        'new_balance': balance.balance,
        'cost': cost,
        'action': action,
    }


def refund_tokens(user, action: str, amount: int, player_id: Optional[UUID] = None,
                  video_id: Optional[UUID] = None) -> int:
    """
    Give back tokens charged for an action that could not be completed.

    Returns:
        New balance
    """
    with transaction.atomic():
        balance = get_or_create_balance(user)
        TokenBalance.objects.filter(pk=balance.pk).update(
            balance=F('balance') + amount,
            lifetime_spent=F('lifetime_spent') - amount,
        )
        balance.refresh_from_db()
        TokenTransaction.objects.create(
            user=user,
            type=TokenTransaction.Type.CREDIT,
            amount=amount,
            action='refund',
            description=f"Refund: {ACTION_DESCRIPTIONS.get(action, action)}",
            player_id=player_id,
            video_id=video_id,
            balance_after=balance.balance,
        )
    logger.info(f"Refunded {amount} tokens to user {user.id} for {action}")
    return balance.balance


def list_transactions(user, limit: int = 50) -> List[TokenTransaction]:
    return list(TokenTransaction.objects.filter(user=user)[:limit])


def get_costs(user) -> Dict[str, Any]:
    return {
        'role': user.role,
        'costs': dict(costs_for_role(user.role)),
    }


def ensure_default_packs() -> None:
    """Seed the default token packs when none exist."""
    if TokenPack.objects.exists():
        return
    TokenPack.objects.bulk_create([TokenPack(**pack) for pack in DEFAULT_TOKEN_PACKS])
    logger.info("Seeded default token packs")


def list_packs() -> List[TokenPack]:
    ensure_default_packs()
    return list(TokenPack.objects.filter(is_active=True))


def create_purchase(user, pack_id: int) -> TokenPurchase:
    """
    Start a purchase of a token pack.

    Raises:
        NotFoundError: if the pack does not exist or is inactive
    """
    try:
        pack = TokenPack.objects.get(id=pack_id, is_active=True)
    except (TokenPack.DoesNotExist, ValueError, TypeError):
        raise NotFoundError('Token pack not found')

    purchase = TokenPurchase.objects.create(
        user=user,
        pack=pack,
        tokens=pack.tokens,
        amount_paid_cents=pack.price_cents,
        currency=pack.currency,
    )
    logger.info(f"User {user.id} started purchase {purchase.id} of pack {pack.name}")
    return purchase


def confirm_purchase(user, purchase_id: UUID) -> Dict[str, Any]:
    """
    Complete a pending purchase and credit the tokens.

    Payments are simulated; the reference is SIM-<timestamp>.

    Raises:
        NotFoundError: if the purchase does not belong to the user
        ValidationError: if the purchase was already completed
    """
    with transaction.atomic():
        try:
            purchase = TokenPurchase.objects.select_for_update().select_related('pack').get(
                id=purchase_id, user=user,
            )
        except TokenPurchase.DoesNotExist:
            raise NotFoundError('Purchase not found')

        if purchase.status == TokenPurchase.Status.COMPLETED:
            raise ValidationError('Purchase already completed')
        purchase.status = TOKEN_PURCHASE_FLOW.advance(purchase.status, TokenPurchase.Status.COMPLETED)
        purchase.payment_reference = f"SIM-{int(time.time() * 1000)}"
        purchase.completed_at = timezone.now()
        purchase.save(update_fields=['status', 'payment_reference', 'completed_at'])

        balance = get_or_create_balance(user)
        TokenBalance.objects.filter(pk=balance.pk).update(
            balance=F('balance') + purchase.tokens,
            lifetime_purchased=F('lifetime_purchased') + purchase.tokens,
        )
        balance.refresh_from_db()
        TokenTransaction.objects.create(
            user=user,
            type=TokenTransaction.Type.CREDIT,
            amount=purchase.tokens,
            action='purchase',
            description=f"Purchased {purchase.pack.name} pack ({purchase.tokens} tokens)",
            purchase=purchase,
            balance_after=balance.balance,
        )

    logger.info(f"User {user.id} completed purchase {purchase.id}, balance {balance.balance}")
    return {
        'success': True,
        'purchase': purchase,
        'new_balance': balance.balance,
    }


def list_purchases(user) -> List[TokenPurchase]:
    return list(TokenPurchase.objects.filter(user=user).select_related('pack'))
