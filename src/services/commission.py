"""
Checkpoint-based commission calculation for SDRs and closers.

Rules:
- Goal attainment picks a checkpoint: <20% pays 1/3, 20-64.99% pays 2/3,
  65% and above pays the full amount
- SDR: fixed pay per qualified meeting and per meeting that closed,
  plus a flat bonus at 100% of goal (not scaled by the checkpoint)
- Closer: fixed amount per sold plan tier scaled by the checkpoint,
  plus a bonus proportional to how far the sale went over the plan's
  base price, plus a goal bonus step at 100/110/120%

Every function here is pure: inputs are read, never stored or mutated.
Plan tiers missing from the configuration contribute zero.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, Mapping, Optional, Union

from src.schemas.commission import (
    CheckpointTier,
    CloserCommissionResult,
    CloserConfig,
    MeetingCounts,
    PlanConfig,
    PlanTier,
    SaleDetail,
    SaleRecord,
    SdrCommissionResult,
    SdrConfig,
)

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float]

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Checkpoint thresholds (percent of goal)
TIER_2_THRESHOLD = Decimal("20")
TIER_3_THRESHOLD = Decimal("65")

# Goal thresholds (percent of goal)
GOAL_100 = Decimal("100")
GOAL_110 = Decimal("110")
GOAL_120 = Decimal("120")


@dataclass(frozen=True)
class Checkpoint:
    """Checkpoint tier with its payout fraction and display labels."""

    tier: CheckpointTier
    fraction: Fraction
    label: str
    range_label: str

    def apply(self, amount: Decimal) -> Decimal:
        """Scale an amount by the payout fraction without rounding drift."""
        return amount * self.fraction.numerator / self.fraction.denominator


CHECKPOINTS = {
    CheckpointTier.TIER_1: Checkpoint(CheckpointTier.TIER_1, Fraction(1, 3), "Iniciante", "0-19%"),
    CheckpointTier.TIER_2: Checkpoint(CheckpointTier.TIER_2, Fraction(2, 3), "Desenvolvendo", "20-64%"),
    CheckpointTier.TIER_3: Checkpoint(CheckpointTier.TIER_3, Fraction(1), "Expert", "65%+"),
}


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal using its printed form (0.1 stays 0.1)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def resolve_plan_tier(plan_tier: Union[PlanTier, str]) -> Optional[PlanTier]:
    """Return the PlanTier for a raw value, or None for tiers the code doesn't know."""
    try:
        return PlanTier(plan_tier)
    except ValueError:
        return None


def _plan_for(plan_tier: Union[PlanTier, str], plans: Mapping[PlanTier, PlanConfig]) -> Optional[PlanConfig]:
    tier = resolve_plan_tier(plan_tier)
    if tier is None:
        return None
    return plans.get(tier)


def classify_checkpoint(goal_attainment: Number) -> Checkpoint:
    """Map percent of goal attained to its checkpoint.

    Negative values are treated as 0%.

    Args:
        goal_attainment: actual / target * 100, may exceed 100

    Returns:
        The Checkpoint for that attainment
    """
    attainment = max(to_decimal(goal_attainment), ZERO)

    if attainment < TIER_2_THRESHOLD:
        return CHECKPOINTS[CheckpointTier.TIER_1]
    if attainment < TIER_3_THRESHOLD:
        return CHECKPOINTS[CheckpointTier.TIER_2]
    return CHECKPOINTS[CheckpointTier.TIER_3]


def monthly_recurring_revenue(
    sale_amount: Number,
    plan_tier: Union[PlanTier, str],
    plans: Mapping[PlanTier, PlanConfig],
) -> Decimal:
    """Normalize a sale paid up-front for N months to its monthly value.

    This is the only MRR computation in the project: goal attainment and the
    closer commission both go through it.

    Returns 0 when the plan tier is not configured.
    """
    plan = _plan_for(plan_tier, plans)
    if plan is None:
        logger.warning("No plan configured for tier %r, MRR counted as 0", plan_tier)
        return ZERO

    return to_decimal(sale_amount) / plan.period_months


def calculate_sdr_commission(
    meeting_counts: MeetingCounts,
    goal_attainment: Number,
    sdr_config: SdrConfig,
) -> SdrCommissionResult:
    """Calculate an SDR's commission for the period.

    The 100% bonus is all-or-nothing and is never scaled by the checkpoint.
    """
    base_amount = (
        meeting_counts.qualified_count * sdr_config.per_qualified_meeting
        + meeting_counts.closed_venue_count * sdr_config.per_meeting_that_closed
    )

    attainment = to_decimal(goal_attainment)
    bonus_amount = sdr_config.bonus_at_goal_100 if attainment >= GOAL_100 else ZERO

    logger.debug(
        "SDR commission: qualified=%s closed=%s attainment=%s base=%s bonus=%s",
        meeting_counts.qualified_count,
        meeting_counts.closed_venue_count,
        attainment,
        base_amount,
        bonus_amount,
    )

    return SdrCommissionResult(
        base_amount=base_amount,
        bonus_amount=bonus_amount,
        total=base_amount + bonus_amount,
        meeting_counts=meeting_counts,
        goal_attainment=attainment,
    )


def _goal_bonus(attainment: Decimal, closer_config: CloserConfig) -> Decimal:
    # Highest step only, steps never add up
    goal_bonus = closer_config.goal_bonus
    if attainment >= GOAL_120:
        return goal_bonus.at_120
    if attainment >= GOAL_110:
        return goal_bonus.at_110
    if attainment >= GOAL_100:
        return goal_bonus.at_100
    return ZERO


def _sale_detail(
    sale: SaleRecord,
    checkpoint: Checkpoint,
    closer_config: CloserConfig,
    plans: Mapping[PlanTier, PlanConfig],
) -> SaleDetail:
    tier = resolve_plan_tier(sale.plan_tier)
    plan = _plan_for(sale.plan_tier, plans)

    fixed_amount = ZERO
    if tier is not None:
        fixed_amount = closer_config.fixed_amount_by_plan_tier.get(tier, ZERO)
    fixed_at_checkpoint = checkpoint.apply(fixed_amount)

    mrr = monthly_recurring_revenue(sale.sale_amount, sale.plan_tier, plans)

    base_price = sale.base_price_at_sale_time
    if base_price > 0:
        percent_above_base = (sale.sale_amount - base_price) / base_price * HUNDRED
    else:
        percent_above_base = ZERO

    bonus_factor = plan.bonus_factor_percent if plan is not None else ZERO
    bonus_percent = percent_above_base * bonus_factor / HUNDRED
    bonus_amount = fixed_at_checkpoint * (bonus_percent / HUNDRED)

    return SaleDetail(
        plan_tier=sale.plan_tier,
        sale_amount=sale.sale_amount,
        base_price_at_sale_time=base_price,
        fixed_amount=fixed_amount,
        fixed_amount_at_checkpoint=fixed_at_checkpoint,
        mrr=mrr,
        percent_above_base=percent_above_base,
        bonus_percent_of_commission=bonus_percent,
        bonus_amount=bonus_amount,
        sale_commission_total=fixed_at_checkpoint + bonus_amount,
    )


def calculate_closer_commission(
    sales: Iterable[SaleRecord],
    goal_attainment: Number,
    closer_config: CloserConfig,
    plans: Mapping[PlanTier, PlanConfig],
) -> CloserCommissionResult:
    """Calculate a closer's commission for the period.

    The checkpoint is a property of the period, so it is resolved once and
    shared by every sale. Sale details keep the input order.

    Args:
        sales: closed sales of the period, already filtered by the caller
        goal_attainment: percent of the closer's goal attained
        closer_config: fixed amounts per plan tier and goal bonus steps
        plans: plan table (period for MRR, bonus factor)

    Returns:
        CloserCommissionResult with per-sale detail and totals
    """
    attainment = to_decimal(goal_attainment)
    checkpoint = classify_checkpoint(attainment)

    details = [_sale_detail(sale, checkpoint, closer_config, plans) for sale in sales]

    sales_commission = sum((d.sale_commission_total for d in details), ZERO)
    total_mrr = sum((d.mrr for d in details), ZERO)
    goal_bonus = _goal_bonus(attainment, closer_config)

    logger.debug(
        "Closer commission: sales=%d attainment=%s checkpoint=%s commission=%s goal_bonus=%s",
        len(details),
        attainment,
        checkpoint.tier.value,
        sales_commission,
        goal_bonus,
    )

    return CloserCommissionResult(
        sales_commission_amount=sales_commission,
        goal_bonus_amount=goal_bonus,
        total=sales_commission + goal_bonus,
        per_sale_detail=details,
        total_mrr=total_mrr,
        goal_attainment=attainment,
        checkpoint=checkpoint.tier,
    )
