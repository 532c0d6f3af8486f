"""
Eligibility scores, compliance orders and consular summary documents.
"""
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import models


class VisaType(models.TextChoices):
    SCHENGEN_SPORTS = 'schengen_sports', 'Schengen Sports'
    UK_GBE = 'uk_gbe', 'UK Governing Body Endorsement'
    UK_ESC = 'uk_esc', 'UK Elite Significance Criteria'
    US_P1 = 'us_p1', 'US P-1'
    US_O1 = 'us_o1', 'US O-1'
    FIFA_TRANSFER = 'fifa_transfer', 'FIFA Transfer'
    MIDDLE_EAST = 'middle_east', 'Middle East'
    ASIA_SPORTS = 'asia_sports', 'Asia Sports'


class EligibilityScore(models.Model):
    """Latest rule-based score of a player for one visa route."""

    class Status(models.TextChoices):
        GREEN = 'green', 'Eligible'
        YELLOW = 'yellow', 'Conditional'
        RED = 'red', 'Ineligible'

    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='eligibility_scores')
    visa_type = models.CharField(max_length=30, choices=VisaType.choices)
    score = models.FloatField()
    status = models.CharField(max_length=10, choices=Status.choices)
    breakdown = models.JSONField(default=dict, blank=True)
    recommendations = models.JSONField(default=list, blank=True)
    league_band_applied = models.PositiveSmallIntegerField(null=True, blank=True)
    calculated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'eligibility_scores'
        ordering = ['visa_type']
        constraints = [
            models.UniqueConstraint(fields=['player', 'visa_type'], name='eligibility_scores_player_visa_unique'),
        ]

    def __str__(self):
        return f"{self.player_id} {self.visa_type}: {self.score}"


class ComplianceOrder(models.Model):
    """A paid request for a consular compliance report."""

    class Status(models.TextChoices):
        PENDING_PAYMENT = 'pending_payment', 'Pending Payment'
        PAID = 'paid', 'Paid'
        COMPLETED = 'completed', 'Completed'

    REPORT_PRICE = Decimal('49.99')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='compliance_orders')
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='compliance_orders',
    )
    visa_type = models.CharField(max_length=30, choices=VisaType.choices)
    target_country = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING_PAYMENT)
    amount = models.DecimalField(max_digits=8, decimal_places=2, default=REPORT_PRICE)
    currency = models.CharField(max_length=3, default='EUR')
    payment_reference = models.CharField(max_length=100, blank=True, default='')
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'compliance_orders'
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.id} ({self.status})"


class ComplianceDocument(models.Model):
    """
    Consular summary generated for a player.

    Editable while in draft; frozen once submitted to an embassy.
    """

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        SUBMITTED = 'submitted', 'Submitted'
        VERIFIED = 'verified', 'Verified'
        REJECTED = 'rejected', 'Rejected'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='compliance_documents')
    order = models.OneToOneField(
        ComplianceOrder,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='document',
    )
    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='compliance_documents',
    )
    document_type = models.CharField(max_length=50, default='consular_summary')
    visa_type = models.CharField(max_length=30, choices=VisaType.choices, blank=True, default='')
    target_country = models.CharField(max_length=100, blank=True, default='')
    date_range_start = models.DateField()
    date_range_end = models.DateField()
    eligibility_snapshot = models.JSONField(default=dict)
    eligibility_score = models.FloatField(null=True, blank=True)
    ai_summary = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    generated_at = models.DateTimeField(auto_now_add=True)
    submitted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'compliance_documents'
        ordering = ['-generated_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(date_range_start__lte=models.F('date_range_end')),
                name='compliance_documents_date_range',
            ),
        ]

    def __str__(self):
        return f"{self.document_type} for {self.player_id} ({self.status})"

    @property
    def is_editable(self) -> bool:
        return self.status == self.Status.DRAFT
