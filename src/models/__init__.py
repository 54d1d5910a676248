"""
Database models.

All models are exported here for convenient imports:
    from src.models import Base, SystemSetting
"""

from src.models.base import Base, TimestampMixin
from src.models.settings import COMMISSION_CONFIG_KEY, SystemSetting

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Settings
    "SystemSetting",
    "COMMISSION_CONFIG_KEY",
]
