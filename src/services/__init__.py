"""Business logic services."""

from src.services.commission import (
    calculate_closer_commission,
    calculate_sdr_commission,
    classify_checkpoint,
    monthly_recurring_revenue,
)
from src.services.commission_config import CommissionConfigRepository, default_commission_config

__all__ = [
    "calculate_closer_commission",
    "calculate_sdr_commission",
    "classify_checkpoint",
    "monthly_recurring_revenue",
    "CommissionConfigRepository",
    "default_commission_config",
]
