"""
Append-only platform audit log.
"""
from django.conf import settings
from django.db import models


class AppendOnlyModel(models.Model):
    """Rows can be inserted but never changed or removed."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"{type(self).__name__} records are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError(f"{type(self).__name__} records are append-only")


class AuditLog(AppendOnlyModel):
    """Who did what to which record."""

    class Category(models.TextChoices):
        AUTH = 'auth', 'Authentication'
        PLAYER = 'player', 'Player'
        VIDEO = 'video', 'Video'
        COMPLIANCE = 'compliance', 'Compliance'
        EMBASSY = 'embassy', 'Embassy'
        SCOUTING = 'scouting', 'Scouting'
        TOKENS = 'tokens', 'Tokens'
        FEDERATION = 'federation', 'Federation'
        ADMIN = 'admin', 'Administration'

    class Severity(models.TextChoices):
        INFO = 'info', 'Info'
        WARNING = 'warning', 'Warning'
        CRITICAL = 'critical', 'Critical'

    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)
    action = models.CharField(max_length=100)
    entity_type = models.CharField(max_length=50, blank=True, default='')
    entity_id = models.CharField(max_length=64, blank=True, default='')
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
    )
    actor_role = models.CharField(max_length=30, blank=True, default='')
    description = models.TextField(blank=True, default='')
    details = models.JSONField(default=dict, blank=True)
    severity = models.CharField(max_length=10, choices=Severity.choices, default=Severity.INFO)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['category', 'timestamp'], name='audit_logs_category_ts_idx'),
        ]

    def __str__(self):
        return f"[{self.category}] {self.action}"
