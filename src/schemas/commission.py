"""
Commission schemas: configuration, engine inputs and calculation results.

Money is always Decimal. Configuration models are frozen so a calculation
can never alter the snapshot it was given.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class PlanTier(str, Enum):
    """Billing cadence of a sold subscription."""
    MENSAL = "mensal"            # 1 month
    TRIMESTRAL = "trimestral"    # 3 months
    SEMESTRAL = "semestral"      # 6 months
    ANUAL = "anual"              # 12 months


class CheckpointTier(str, Enum):
    """Payout tier derived from goal attainment."""
    TIER_1 = "tier1"
    TIER_2 = "tier2"
    TIER_3 = "tier3"


def _require_every_tier(value: dict) -> dict:
    missing = [tier.value for tier in PlanTier if tier not in value]
    if missing:
        raise ValueError(f"missing plan tiers: {', '.join(missing)}")
    return value


# ── Configuration ─────────────────────────────────────────


class SdrConfig(BaseModel):
    """SDR pay per meeting and the flat bonus at 100% of goal."""

    per_qualified_meeting: Decimal = Field(..., ge=0)
    per_meeting_that_closed: Decimal = Field(..., ge=0)
    bonus_at_goal_100: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}


class GoalBonus(BaseModel):
    """Closer bonus steps. Only the highest reached step is paid."""

    at_100: Decimal = Field(..., ge=0)
    at_110: Decimal = Field(..., ge=0)
    at_120: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}


class CloserConfig(BaseModel):
    """Closer fixed amount per sold plan tier and goal bonus steps."""

    fixed_amount_by_plan_tier: Dict[PlanTier, Decimal]
    goal_bonus: GoalBonus

    model_config = {"frozen": True}

    @field_validator("fixed_amount_by_plan_tier")
    @classmethod
    def every_tier_has_amount(cls, v: Dict[PlanTier, Decimal]) -> Dict[PlanTier, Decimal]:
        for amount in v.values():
            if amount < 0:
                raise ValueError("fixed amounts must be >= 0")
        return _require_every_tier(v)


class PlanConfig(BaseModel):
    """Pricing of one plan tier."""

    base_price: Decimal = Field(..., ge=0)
    period_months: int = Field(..., ge=1)
    bonus_factor_percent: Decimal = Field(..., ge=0)

    model_config = {"frozen": True}


class CheckpointFractions(BaseModel):
    """
    Payout fraction of each checkpoint tier.

    Kept with the configuration for display only: the engine always pays
    1/3, 2/3 and 1 regardless of what is stored here.
    """

    tier1: float = 1 / 3
    tier2: float = 2 / 3
    tier3: float = 1.0

    model_config = {"frozen": True}


class CommissionConfig(BaseModel):
    """Complete commission configuration snapshot."""

    sdr: SdrConfig
    closer: CloserConfig
    plans: Dict[PlanTier, PlanConfig]
    checkpoints: CheckpointFractions = Field(default_factory=CheckpointFractions)

    model_config = {"frozen": True}

    @field_validator("plans")
    @classmethod
    def every_tier_has_plan(cls, v: Dict[PlanTier, PlanConfig]) -> Dict[PlanTier, PlanConfig]:
        return _require_every_tier(v)


# ── Engine inputs ─────────────────────────────────────────


class SaleRecord(BaseModel):
    """
    One closed sale.

    plan_tier is a plain string so tiers the code does not know yet still
    reach the engine (they contribute zero).
    """

    plan_tier: str
    sale_amount: Decimal = Field(..., ge=0)
    base_price_at_sale_time: Decimal = Field(..., ge=0)


class MeetingCounts(BaseModel):
    """Meetings of one SDR in the period."""

    qualified_count: int = Field(0, ge=0)
    closed_venue_count: int = Field(0, ge=0)


# ── Results ───────────────────────────────────────────────


class SdrCommissionResult(BaseModel):
    """SDR commission breakdown."""

    base_amount: Decimal
    bonus_amount: Decimal
    total: Decimal
    meeting_counts: MeetingCounts
    goal_attainment: Decimal


class SaleDetail(BaseModel):
    """Commission breakdown of a single sale."""

    plan_tier: str
    sale_amount: Decimal
    base_price_at_sale_time: Decimal
    fixed_amount: Decimal
    fixed_amount_at_checkpoint: Decimal
    mrr: Decimal
    percent_above_base: Decimal  # negative when sold below base price
    bonus_percent_of_commission: Decimal
    bonus_amount: Decimal
    sale_commission_total: Decimal


class CloserCommissionResult(BaseModel):
    """Closer commission breakdown."""

    sales_commission_amount: Decimal
    goal_bonus_amount: Decimal
    total: Decimal
    per_sale_detail: List[SaleDetail] = Field(default_factory=list)
    total_mrr: Decimal
    goal_attainment: Decimal
    checkpoint: CheckpointTier


# ── API payloads ──────────────────────────────────────────


class CheckpointResponse(BaseModel):
    """Checkpoint tier for a goal attainment value."""

    tier: CheckpointTier
    fraction: float
    label: str
    range_label: str
    goal_attainment: Decimal


class SdrCommissionRequest(BaseModel):
    """Calculate one SDR's commission with the stored configuration."""

    meeting_counts: MeetingCounts
    goal_attainment: Decimal = Field(..., ge=0)


class CloserCommissionRequest(BaseModel):
    """Calculate one closer's commission with the stored configuration."""

    sales: List[SaleRecord] = Field(default_factory=list)
    goal_attainment: Decimal = Field(..., ge=0)


class MrrRequest(BaseModel):
    """Normalize one sale amount to its monthly value."""

    sale_amount: Decimal = Field(..., ge=0)
    plan_tier: str


class MrrResponse(BaseModel):
    plan_tier: str
    mrr: Decimal
