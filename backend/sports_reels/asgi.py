"""
ASGI config for the sports_reels project.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import atexit
import os
from django.core.asgi import get_asgi_application
from django.contrib.staticfiles.handlers import ASGIStaticFilesHandler

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sports_reels.settings")

# Get the ASGI application
django_asgi_app = get_asgi_application()

from sports_reels.core.logging import setup_logging  # noqa: E402
from sports_reels.observability.tracing import cleanup_client  # noqa: E402

setup_logging()

# Flush pending Langfuse traces on shutdown
atexit.register(cleanup_client)

# Wrap with static files handler for development
# In production, static files should be served by nginx or a CDN
application = ASGIStaticFilesHandler(django_asgi_app)
