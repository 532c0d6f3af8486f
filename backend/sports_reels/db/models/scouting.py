"""
Scouting inquiries between clubs and their message threads.
"""
import uuid
from django.conf import settings
from django.db import models


class ScoutingInquiry(models.Model):
    """Transfer interest in a player from a buying club."""

    class Status(models.TextChoices):
        INQUIRY = 'inquiry', 'Inquiry'
        NEGOTIATION = 'negotiation', 'Negotiation'
        DUE_DILIGENCE = 'due_diligence', 'Due Diligence'
        CLOSED = 'closed', 'Closed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    player = models.ForeignKey('db.Player', on_delete=models.CASCADE, related_name='scouting_inquiries')
    buying_club_name = models.CharField(max_length=200)
    selling_club_name = models.CharField(max_length=200, blank=True, default='')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.INQUIRY, db_index=True)
    compliance_score = models.FloatField(null=True, blank=True)
    message = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='scouting_inquiries',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'scouting_inquiries'
        ordering = ['-created_at']
        verbose_name_plural = 'Scouting inquiries'

    def __str__(self):
        return f"{self.buying_club_name} -> {self.player_id} ({self.status})"


class InquiryMessage(models.Model):
    inquiry = models.ForeignKey(ScoutingInquiry, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='inquiry_messages',
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'inquiry_messages'
        ordering = ['created_at']

    def __str__(self):
        return f"Message {self.id} on {self.inquiry_id}"
