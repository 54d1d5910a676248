"""Pydantic schemas for request/response validation."""

from src.schemas.commission import (
    CheckpointResponse,
    CheckpointTier,
    CloserCommissionRequest,
    CloserCommissionResult,
    CloserConfig,
    CommissionConfig,
    GoalBonus,
    MeetingCounts,
    MrrRequest,
    MrrResponse,
    PlanConfig,
    PlanTier,
    SaleDetail,
    SaleRecord,
    SdrCommissionRequest,
    SdrCommissionResult,
    SdrConfig,
)
from src.schemas.ranking import (
    CloserRankingEntry,
    CollaboratorRow,
    MeetingRow,
    RankingRequest,
    RankingResponse,
    SaleRow,
    SdrRankingEntry,
)

__all__ = [
    # Configuration
    "CommissionConfig",
    "SdrConfig",
    "CloserConfig",
    "GoalBonus",
    "PlanConfig",
    "PlanTier",
    "CheckpointTier",
    # Engine
    "MeetingCounts",
    "SaleRecord",
    "SaleDetail",
    "SdrCommissionResult",
    "CloserCommissionResult",
    # API
    "CheckpointResponse",
    "SdrCommissionRequest",
    "CloserCommissionRequest",
    "MrrRequest",
    "MrrResponse",
    # Ranking
    "CollaboratorRow",
    "MeetingRow",
    "SaleRow",
    "RankingRequest",
    "RankingResponse",
    "SdrRankingEntry",
    "CloserRankingEntry",
]
