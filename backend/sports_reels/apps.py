"""
Django app configuration.
"""

from django.apps import AppConfig


class SportsReelsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sports_reels"
    verbose_name = "Sports Reels"
