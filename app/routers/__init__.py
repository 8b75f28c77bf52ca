# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - chat.py: Chat completions over the resolved provider model
# - admin.py: Provider health, validation, Azure models, settings, pricing plans
# - pricing.py: Public pricing plans
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import chat
from . import admin
from . import pricing

__all__ = [
    "health",
    "chat",
    "admin",
    "pricing",
]
