"""Ranking schemas: raw rows coming from the CRM and the ranking output."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.schemas.commission import CloserCommissionResult, SdrCommissionResult


class CollaboratorRow(BaseModel):
    """Team member as stored in the CRM."""

    id: int
    name: str
    role: str  # "sdr" or "closer", any case


class MeetingRow(BaseModel):
    """Meeting booked by an SDR."""

    sdr_id: int
    meeting_type: str = Field(..., pattern="^(qualificada|gerou_venda)$")


class SaleRow(BaseModel):
    """Closed sale as stored in the CRM. Old rows may miss plan or prices."""

    closer_id: Optional[int] = None
    plan_tier: Optional[str] = None
    sale_amount: Optional[Decimal] = Field(None, ge=0)
    base_price: Optional[Decimal] = Field(None, ge=0)


class SdrRankingEntry(BaseModel):
    collaborator_id: int
    name: str
    commission: SdrCommissionResult


class CloserRankingEntry(BaseModel):
    collaborator_id: int
    name: str
    commission: CloserCommissionResult


class RankingRequest(BaseModel):
    """Data of one period, already filtered by the caller."""

    collaborators: List[CollaboratorRow] = Field(default_factory=list)
    meetings: List[MeetingRow] = Field(default_factory=list)
    sales: List[SaleRow] = Field(default_factory=list)
    sdr_meeting_target: Optional[int] = Field(None, ge=1)
    closer_mrr_target: Optional[Decimal] = Field(None, gt=0)


class RankingResponse(BaseModel):
    """SDR and closer rankings, best total first."""

    sdrs: List[SdrRankingEntry] = Field(default_factory=list)
    closers: List[CloserRankingEntry] = Field(default_factory=list)
