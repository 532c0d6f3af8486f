"""
Federation letter requests, fee schedules and payment history.
"""
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import models
from sports_reels.db.models.audit import AppendOnlyModel

DEFAULT_FEDERATION_FEE = Decimal('150.00')
DEFAULT_SERVICE_CHARGE = Decimal('25.00')


class FederationProfile(models.Model):
    """A national federation that issues letters."""

    name = models.CharField(max_length=200)
    country = models.CharField(max_length=100, unique=True)
    region = models.CharField(max_length=100, blank=True, default='')
    contact_email = models.EmailField(blank=True, default='')
    default_fee = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_FEDERATION_FEE)
    platform_service_charge = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_SERVICE_CHARGE)
    currency = models.CharField(max_length=3, default='EUR')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'federation_profiles'
        ordering = ['country']

    def __str__(self):
        return f"{self.name} ({self.country})"


class FederationFeeSchedule(models.Model):
    """Fee charged by a federation for letters to a destination country."""

    federation = models.ForeignKey(
        FederationProfile,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='fee_schedules',
    )
    country = models.CharField(max_length=100, db_index=True)
    base_fee = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_FEDERATION_FEE)
    platform_service_charge = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_SERVICE_CHARGE)
    currency = models.CharField(max_length=3, default='EUR')
    effective_from = models.DateField(null=True, blank=True)
    effective_to = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'federation_fee_schedules'
        ordering = ['country', '-created_at']

    def __str__(self):
        return f"{self.country}: {self.base_fee} + {self.platform_service_charge}"

    @property
    def total(self) -> Decimal:
        return self.base_fee + self.platform_service_charge


class FederationLetterRequest(models.Model):
    """A club's request for a federation letter supporting a transfer."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        SUBMITTED = 'submitted', 'Submitted'
        PROCESSING = 'processing', 'Processing'
        ISSUED = 'issued', 'Issued'
        REJECTED = 'rejected', 'Rejected'

    class PaymentStatus(models.TextChoices):
        UNPAID = 'unpaid', 'Unpaid'
        PAID = 'paid', 'Paid'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request_number = models.CharField(max_length=40, unique=True)
    team = models.ForeignKey(
        'account.Team',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='federation_requests',
    )
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='federation_requests')
    federation = models.ForeignKey(
        FederationProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='letter_requests',
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    athlete_full_name = models.CharField(max_length=200)
    athlete_nationality = models.CharField(max_length=100)
    target_club_name = models.CharField(max_length=200)
    target_club_country = models.CharField(max_length=100)
    transfer_type = models.CharField(max_length=30, default='permanent')
    invitation_letter_path = models.CharField(max_length=500, blank=True, default='')
    notes = models.TextField(blank=True, default='')

    fee_amount = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_FEDERATION_FEE)
    service_charge = models.DecimalField(max_digits=10, decimal_places=2, default=DEFAULT_SERVICE_CHARGE)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default='EUR')
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    payment_reference = models.CharField(max_length=100, blank=True, default='')
    payment_confirmed_at = models.DateTimeField(null=True, blank=True)

    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='federation_requests',
    )
    submitted_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_federation_requests',
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    issued_document_path = models.CharField(max_length=500, blank=True, default='')
    issued_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'federation_letter_requests'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.request_number} ({self.status})"


class FederationRequestActivity(AppendOnlyModel):
    """Timeline entry for a letter request."""

    request = models.ForeignKey(
        FederationLetterRequest,
        on_delete=models.CASCADE,
        related_name='activities',
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    activity_type = models.CharField(max_length=50)
    description = models.TextField(blank=True, default='')
    previous_status = models.CharField(max_length=20, blank=True, default='')
    new_status = models.CharField(max_length=20, blank=True, default='')
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'federation_request_activities'
        ordering = ['timestamp', 'id']


class FederationPayment(AppendOnlyModel):
    """Payment history row shown read-only in admin views."""

    class FeeType(models.TextChoices):
        FEDERATION_FEE = 'federation_fee', 'Federation Fee'
        SERVICE_CHARGE = 'service_charge', 'Platform Service Charge'

    federation = models.ForeignKey(
        FederationProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments',
    )
    request = models.ForeignKey(
        FederationLetterRequest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments',
    )
    team = models.ForeignKey(
        'account.Team',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='federation_payments',
    )
    fee_type = models.CharField(max_length=20, choices=FeeType.choices)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default='EUR')
    status = models.CharField(max_length=20, default='completed')
    transaction_reference = models.CharField(max_length=100, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'federation_payments'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.fee_type} {self.amount} {self.currency}"
