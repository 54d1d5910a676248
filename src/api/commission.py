"""Commission API endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.db import get_db
from src.schemas.commission import (
    CheckpointResponse,
    CloserCommissionRequest,
    CloserCommissionResult,
    CommissionConfig,
    MrrRequest,
    MrrResponse,
    SdrCommissionRequest,
    SdrCommissionResult,
)
from src.schemas.ranking import RankingRequest, RankingResponse
from src.services.commission import (
    calculate_closer_commission,
    calculate_sdr_commission,
    classify_checkpoint,
    monthly_recurring_revenue,
)
from src.services.commission_config import CommissionConfigRepository
from src.services.ranking import build_closer_ranking, build_sdr_ranking

router = APIRouter(prefix="/commission", tags=["Commission"])


@router.get("/config", response_model=CommissionConfig)
async def get_config(db: AsyncSession = Depends(get_db)):
    """Get the current commission configuration."""
    return await CommissionConfigRepository(db).load()


@router.put("/config", response_model=CommissionConfig)
async def update_config(
    data: CommissionConfig,
    db: AsyncSession = Depends(get_db),
):
    """Replace the commission configuration."""
    config = await CommissionConfigRepository(db).save(data)
    await db.commit()
    return config


@router.delete("/config", response_model=CommissionConfig)
async def reset_config(db: AsyncSession = Depends(get_db)):
    """Drop the stored configuration and go back to the defaults."""
    config = await CommissionConfigRepository(db).reset()
    await db.commit()
    return config


@router.get("/checkpoint", response_model=CheckpointResponse)
async def get_checkpoint(goal_attainment: Decimal = Query(..., ge=0)):
    """Get the checkpoint tier for a goal attainment percentage."""
    checkpoint = classify_checkpoint(goal_attainment)
    return CheckpointResponse(
        tier=checkpoint.tier,
        fraction=float(checkpoint.fraction),
        label=checkpoint.label,
        range_label=checkpoint.range_label,
        goal_attainment=goal_attainment,
    )


@router.post("/mrr", response_model=MrrResponse)
async def get_mrr(
    data: MrrRequest,
    db: AsyncSession = Depends(get_db),
):
    """Normalize a sale amount to MRR with the configured plan periods."""
    config = await CommissionConfigRepository(db).load()
    return MrrResponse(
        plan_tier=data.plan_tier,
        mrr=monthly_recurring_revenue(data.sale_amount, data.plan_tier, config.plans),
    )


@router.post("/sdr", response_model=SdrCommissionResult)
async def sdr_commission(
    data: SdrCommissionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Calculate an SDR commission with the stored configuration."""
    config = await CommissionConfigRepository(db).load()
    return calculate_sdr_commission(data.meeting_counts, data.goal_attainment, config.sdr)


@router.post("/closer", response_model=CloserCommissionResult)
async def closer_commission(
    data: CloserCommissionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Calculate a closer commission with the stored configuration."""
    config = await CommissionConfigRepository(db).load()
    return calculate_closer_commission(
        data.sales, data.goal_attainment, config.closer, config.plans
    )


@router.post("/ranking", response_model=RankingResponse)
async def ranking(
    data: RankingRequest,
    db: AsyncSession = Depends(get_db),
):
    """Rank SDRs and closers of a period by commission total."""
    config = await CommissionConfigRepository(db).load()

    meeting_target = data.sdr_meeting_target or settings.default_sdr_meeting_target
    mrr_target = data.closer_mrr_target or settings.default_closer_mrr_target

    return RankingResponse(
        sdrs=build_sdr_ranking(data.collaborators, data.meetings, meeting_target, config),
        closers=build_closer_ranking(data.collaborators, data.sales, mrr_target, config),
    )
