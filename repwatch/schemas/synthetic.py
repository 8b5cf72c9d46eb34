"""Shapes of the seeded illustrative profiles."""

from typing import List, Literal

from repwatch.schemas.records import CamelModel


class Donor(CamelModel):
    name: str
    amount: int
    type: Literal["Individual", "PAC", "Corporation", "Union", "Self"]


class SpendingCategory(CamelModel):
    category: str
    amount: int


class FundraisingMonth(CamelModel):
    month: str
    raised: int
    spent: int


class CampaignFinance(CamelModel):
    entity_id: str
    total_raised: int
    total_spent: int
    cash_on_hand: int
    cycle: str
    top_donors: List[Donor]
    spending_breakdown: List[SpendingCategory]
    fundraising_trend: List[FundraisingMonth]


class IssueGrade(CamelModel):
    issue: str
    grade: str
    score: int
    votes_for: int
    votes_against: int
    votes_abstain: int


class KeyVote(CamelModel):
    bill_number: str
    title: str
    date: str
    vote: Literal["Yes", "No", "Abstain", "Not Voting"]
    result: Literal["Passed", "Failed", "Pending"]


class VotingRecord(CamelModel):
    entity_id: str
    overall_score: int
    issue_grades: List[IssueGrade]
    key_votes: List[KeyVote]
    total_votes: int
    attendance: int
