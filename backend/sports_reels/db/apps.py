"""
Database models app configuration.
"""
from django.apps import AppConfig


class DbConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sports_reels.db'
    label = 'db'
    verbose_name = 'Compliance Records'

    def ready(self):
        # Import models here to avoid circular imports
        # Note: User and Team models live in sports_reels.account.models
        from . import models  # noqa
