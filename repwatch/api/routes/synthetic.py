"""Illustrative campaign-finance and voting profiles (no upstream calls)."""

from fastapi import APIRouter

from repwatch.schemas.api import (
    CampaignFinanceRequest,
    CampaignFinanceResponse,
    VotingRecordRequest,
    VotingRecordResponse,
)
from repwatch.services import synthetic

router = APIRouter(prefix="/synthetic", tags=["synthetic"])


@router.post("/campaign-finance", response_model=CampaignFinanceResponse)
def campaign_finance(body: CampaignFinanceRequest):
    """Seeded by the entity id: the same official always gets the same figures."""
    return CampaignFinanceResponse(data=synthetic.campaign_finance(body.entity_id, body.party, body.level))


@router.post("/voting-record", response_model=VotingRecordResponse)
def voting_record(body: VotingRecordRequest):
    return VotingRecordResponse(data=synthetic.voting_record(body.entity_id, body.key_issues, body.party))
