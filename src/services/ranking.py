"""
Commission rankings for the dashboard.

Turns raw CRM rows (collaborators, meetings, sales) into the facts the
commission engine needs, computes each person's goal attainment and
ranks people by commission total.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Mapping

from src.schemas.commission import (
    CommissionConfig,
    MeetingCounts,
    PlanConfig,
    PlanTier,
    SaleRecord,
)
from src.schemas.ranking import (
    CloserRankingEntry,
    CollaboratorRow,
    MeetingRow,
    SaleRow,
    SdrRankingEntry,
)
from src.services.commission import (
    HUNDRED,
    ZERO,
    Number,
    calculate_closer_commission,
    calculate_sdr_commission,
    monthly_recurring_revenue,
    resolve_plan_tier,
    to_decimal,
)

logger = logging.getLogger(__name__)

MEETING_QUALIFIED = "qualificada"
MEETING_CLOSED = "gerou_venda"

ROLE_SDR = "sdr"
ROLE_CLOSER = "closer"


def goal_attainment_percent(actual: Number, target: Number) -> Decimal:
    """actual / target * 100, never negative. A non-positive target gives 0."""
    target = to_decimal(target)
    if target <= 0:
        return ZERO
    return max(to_decimal(actual) / target * HUNDRED, ZERO)


def count_sdr_meetings(meetings: Iterable[MeetingRow], sdr_id: int) -> MeetingCounts:
    """Count an SDR's qualified meetings and meetings that became a sale."""
    qualified = 0
    closed = 0
    for meeting in meetings:
        if meeting.sdr_id != sdr_id:
            continue
        if meeting.meeting_type == MEETING_QUALIFIED:
            qualified += 1
        elif meeting.meeting_type == MEETING_CLOSED:
            closed += 1
    return MeetingCounts(qualified_count=qualified, closed_venue_count=closed)


def closer_sales(
    sales: Iterable[SaleRow],
    closer_id: int,
    plans: Mapping[PlanTier, PlanConfig],
) -> List[SaleRecord]:
    """Build the closer's SaleRecords, filling gaps of older rows.

    - missing plan tier counts as mensal
    - missing sale amount counts as 0
    - missing base price uses the configured base price of the plan
    """
    records = []
    for sale in sales:
        if sale.closer_id != closer_id:
            continue

        plan_tier = sale.plan_tier or PlanTier.MENSAL.value
        base_price = sale.base_price
        if not base_price:
            tier = resolve_plan_tier(plan_tier)
            plan = plans.get(tier) if tier is not None else None
            base_price = plan.base_price if plan is not None else ZERO

        records.append(
            SaleRecord(
                plan_tier=plan_tier,
                sale_amount=sale.sale_amount or ZERO,
                base_price_at_sale_time=base_price,
            )
        )
    return records


def _with_role(collaborators: Iterable[CollaboratorRow], role: str) -> List[CollaboratorRow]:
    return [c for c in collaborators if c.role.strip().lower() == role]


def build_sdr_ranking(
    collaborators: Iterable[CollaboratorRow],
    meetings: Iterable[MeetingRow],
    meeting_target: int,
    config: CommissionConfig,
) -> List[SdrRankingEntry]:
    """Rank SDRs by commission total. Goal = all meetings booked / meeting target."""
    meetings = list(meetings)
    entries = []

    for sdr in _with_role(collaborators, ROLE_SDR):
        counts = count_sdr_meetings(meetings, sdr.id)
        attainment = goal_attainment_percent(
            counts.qualified_count + counts.closed_venue_count, meeting_target
        )
        commission = calculate_sdr_commission(counts, attainment, config.sdr)
        entries.append(
            SdrRankingEntry(collaborator_id=sdr.id, name=sdr.name, commission=commission)
        )

    entries.sort(key=lambda e: e.commission.total, reverse=True)
    return entries


def build_closer_ranking(
    collaborators: Iterable[CollaboratorRow],
    sales: Iterable[SaleRow],
    mrr_target: Number,
    config: CommissionConfig,
) -> List[CloserRankingEntry]:
    """Rank closers by commission total. Goal = MRR sold / MRR target."""
    sales = list(sales)
    entries = []

    for closer in _with_role(collaborators, ROLE_CLOSER):
        records = closer_sales(sales, closer.id, config.plans)
        mrr = sum(
            (monthly_recurring_revenue(r.sale_amount, r.plan_tier, config.plans) for r in records),
            ZERO,
        )
        attainment = goal_attainment_percent(mrr, mrr_target)
        commission = calculate_closer_commission(records, attainment, config.closer, config.plans)
        entries.append(
            CloserRankingEntry(collaborator_id=closer.id, name=closer.name, commission=commission)
        )

    entries.sort(key=lambda e: e.commission.total, reverse=True)
    logger.debug("Closer ranking built for %d closers", len(entries))
    return entries
