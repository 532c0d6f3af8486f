"""
Token balances, ledger, packs and purchases.
"""
import uuid
from django.conf import settings
from django.db import models


class TokenBalance(models.Model):
    """Current spendable tokens of a user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='token_balance',
    )
    balance = models.IntegerField(default=0)
    lifetime_purchased = models.PositiveIntegerField(default=0)
    lifetime_spent = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'token_balances'
        constraints = [
            models.CheckConstraint(condition=models.Q(balance__gte=0), name='token_balances_non_negative'),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.balance}"


class TokenTransaction(models.Model):
    """Ledger row; amount is positive for credits and negative for debits."""

    class Type(models.TextChoices):
        CREDIT = 'credit', 'Credit'
        DEBIT = 'debit', 'Debit'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='token_transactions',
    )
    type = models.CharField(max_length=10, choices=Type.choices)
    amount = models.IntegerField()
    action = models.CharField(max_length=50)
    description = models.CharField(max_length=255, blank=True, default='')
    player_id = models.UUIDField(null=True, blank=True)
    video_id = models.UUIDField(null=True, blank=True)
    purchase = models.ForeignKey(
        'db.TokenPurchase',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions',
    )
    balance_after = models.IntegerField()
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'token_transactions'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='token_tx_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} ({self.action})"


class TokenPack(models.Model):
    name = models.CharField(max_length=50, unique=True)
    tokens = models.PositiveIntegerField()
    price_cents = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='EUR')
    description = models.CharField(max_length=255, blank=True, default='')
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'token_packs'
        ordering = ['sort_order', 'tokens']

    def __str__(self):
        return f"{self.name} ({self.tokens} tokens)"


class TokenPurchase(models.Model):
    """Purchase of a token pack; credited to the balance on confirmation."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'
        FAILED = 'failed', 'Failed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='token_purchases',
    )
    pack = models.ForeignKey(TokenPack, on_delete=models.PROTECT, related_name='purchases')
    tokens = models.PositiveIntegerField()
    amount_paid_cents = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='EUR')
    payment_method = models.CharField(max_length=30, default='simulated')
    payment_reference = models.CharField(max_length=100, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'token_purchases'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.pack_id} x{self.tokens} ({self.status})"
