"""
Tests for commission rankings:
- goal_attainment_percent
- count_sdr_meetings / closer_sales aggregation from CRM rows
- build_sdr_ranking / build_closer_ranking ordering and goals
"""

from decimal import Decimal

from src.schemas.ranking import CollaboratorRow, MeetingRow, SaleRow
from src.services.commission_config import default_commission_config
from src.services.ranking import (
    build_closer_ranking,
    build_sdr_ranking,
    closer_sales,
    count_sdr_meetings,
    goal_attainment_percent,
)


CONFIG = default_commission_config()


def _meetings(sdr_id, qualified=0, closed=0):
    return (
        [MeetingRow(sdr_id=sdr_id, meeting_type="qualificada") for _ in range(qualified)]
        + [MeetingRow(sdr_id=sdr_id, meeting_type="gerou_venda") for _ in range(closed)]
    )


# ── goal_attainment_percent ───────────────────────────────


class TestGoalAttainment:
    def test_basic(self):
        assert goal_attainment_percent(25, 50) == Decimal("50")

    def test_can_exceed_100(self):
        assert goal_attainment_percent(Decimal("18000"), Decimal("15000")) == Decimal("120")

    def test_zero_target(self):
        assert goal_attainment_percent(10, 0) == 0

    def test_never_negative(self):
        assert goal_attainment_percent(-10, 50) == 0


# ── Aggregation ───────────────────────────────────────────


class TestCountSdrMeetings:
    def test_counts_by_type_for_one_sdr(self):
        meetings = _meetings(1, qualified=3, closed=2) + _meetings(2, qualified=5)
        counts = count_sdr_meetings(meetings, 1)
        assert counts.qualified_count == 3
        assert counts.closed_venue_count == 2

    def test_no_meetings(self):
        counts = count_sdr_meetings([], 1)
        assert counts.qualified_count == 0
        assert counts.closed_venue_count == 0


class TestCloserSales:
    def test_filters_by_closer(self):
        sales = [
            SaleRow(closer_id=1, plan_tier="anual", sale_amount=Decimal("1200"), base_price=Decimal("1000")),
            SaleRow(closer_id=2, plan_tier="mensal", sale_amount=Decimal("100"), base_price=Decimal("99.90")),
        ]
        records = closer_sales(sales, 1, CONFIG.plans)
        assert len(records) == 1
        assert records[0].plan_tier == "anual"
        assert records[0].base_price_at_sale_time == Decimal("1000")

    def test_fills_missing_fields(self):
        sales = [SaleRow(closer_id=1)]
        record = closer_sales(sales, 1, CONFIG.plans)[0]
        assert record.plan_tier == "mensal"
        assert record.sale_amount == 0
        assert record.base_price_at_sale_time == Decimal("99.90")

    def test_base_price_from_plan_table(self):
        sales = [SaleRow(closer_id=1, plan_tier="semestral", sale_amount=Decimal("600"))]
        record = closer_sales(sales, 1, CONFIG.plans)[0]
        assert record.base_price_at_sale_time == Decimal("479.90")

    def test_unknown_tier_kept_with_zero_base(self):
        sales = [SaleRow(closer_id=1, plan_tier="vitalicio", sale_amount=Decimal("600"))]
        record = closer_sales(sales, 1, CONFIG.plans)[0]
        assert record.plan_tier == "vitalicio"
        assert record.base_price_at_sale_time == 0


# ── Rankings ──────────────────────────────────────────────


class TestSdrRanking:
    def test_sorted_by_total_and_filtered_by_role(self):
        collaborators = [
            CollaboratorRow(id=1, name="Ana", role="SDR"),
            CollaboratorRow(id=2, name="Bruno", role="sdr"),
            CollaboratorRow(id=3, name="Carla", role="Closer"),
        ]
        meetings = _meetings(1, qualified=2) + _meetings(2, qualified=10, closed=5)

        ranking = build_sdr_ranking(collaborators, meetings, 50, CONFIG)

        assert [e.collaborator_id for e in ranking] == [2, 1]
        assert ranking[0].commission.base_amount == Decimal("125")  # 10×5 + 5×15
        assert ranking[0].commission.goal_attainment == Decimal("30")

    def test_goal_reached_pays_bonus(self):
        collaborators = [CollaboratorRow(id=1, name="Ana", role="sdr")]
        meetings = _meetings(1, qualified=40, closed=10)

        entry = build_sdr_ranking(collaborators, meetings, 50, CONFIG)[0]

        assert entry.commission.goal_attainment == Decimal("100")
        assert entry.commission.bonus_amount == Decimal("300")
        assert entry.commission.total == Decimal("650")  # 200 + 150 + 300


class TestCloserRanking:
    def test_goal_from_mrr(self):
        collaborators = [CollaboratorRow(id=7, name="Carla", role="closer")]
        sales = [
            SaleRow(closer_id=7, plan_tier="anual", sale_amount=Decimal("1200"), base_price=Decimal("1200")),
        ]

        entry = build_closer_ranking(collaborators, sales, Decimal("1000"), CONFIG)[0]

        # 100 MRR of 1000 target → 10% → tier1
        assert entry.commission.goal_attainment == Decimal("10")
        assert entry.commission.total_mrr == Decimal("100")
        assert entry.commission.checkpoint.value == "tier1"
        assert entry.name == "Carla"

    def test_sorted_by_total(self):
        collaborators = [
            CollaboratorRow(id=1, name="Diego", role="closer"),
            CollaboratorRow(id=2, name="Elisa", role="closer"),
            CollaboratorRow(id=3, name="Ana", role="sdr"),
        ]
        sales = [
            SaleRow(closer_id=1, plan_tier="mensal", sale_amount=Decimal("99.90")),
            SaleRow(closer_id=2, plan_tier="anual", sale_amount=Decimal("839.90")),
            SaleRow(closer_id=2, plan_tier="anual", sale_amount=Decimal("839.90")),
        ]

        ranking = build_closer_ranking(collaborators, sales, Decimal("15000"), CONFIG)

        assert [e.collaborator_id for e in ranking] == [2, 1]
        assert ranking[1].commission.goal_bonus_amount == 0
