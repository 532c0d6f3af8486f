"""
Embassy review of submitted compliance documents.
"""
import secrets
import uuid
from django.conf import settings
from django.db import models


def generate_verification_code() -> str:
    """Short public code printed on consular reports, e.g. SR-7F3K9Q2M."""
    alphabet = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
    return 'SR-' + ''.join(secrets.choice(alphabet) for _ in range(8))


class EmbassyVerification(models.Model):
    """Review workflow state attached to a submitted compliance document."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        UNDER_REVIEW = 'under_review', 'Under Review'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    document = models.ForeignKey(
        'db.ComplianceDocument',
        on_delete=models.CASCADE,
        related_name='verifications',
    )
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='embassy_verifications')
    embassy_country = models.CharField(max_length=100, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    verification_code = models.CharField(
        max_length=20,
        unique=True,
        default=generate_verification_code,
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_verifications',
    )
    notes = models.TextField(blank=True, default='')
    submitted_at = models.DateTimeField(auto_now_add=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'embassy_verifications'
        ordering = ['-submitted_at']

    def __str__(self):
        return f"{self.verification_code} ({self.status})"
