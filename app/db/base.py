# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# Base.metadata knows every table when the schema is created or when Alembic
# runs its auto-generation scan.

from .base_class import Base

from .models.user_models import User
from .models.generation_models import Generation, UsageLog
from .models.billing_models import Subscription, WebhookEvent
