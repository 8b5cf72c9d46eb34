"""Seeded illustrative profiles for officials without an authoritative data source.

Every number here is a pure function of the seed string: no clock and no
process-wide randomness, so the same entity always gets the same profile.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from repwatch.core.reference import (
    DEFAULT_LEVEL_MULTIPLIER,
    DONOR_NAMES,
    DONOR_TYPES,
    FINANCE_CYCLE,
    ISSUE_CATEGORIES,
    LEVEL_MULTIPLIERS,
    MONTHS,
    SAMPLE_BILLS,
    SPENDING_CATEGORIES,
)
from repwatch.schemas.synthetic import (
    CampaignFinance,
    Donor,
    FundraisingMonth,
    IssueGrade,
    KeyVote,
    SpendingCategory,
    VotingRecord,
)

MODULUS = 2147483647  # 2**31 - 1
MULTIPLIER = 16807

_GRADE_FLOORS = (
    (93, "A+"), (90, "A"), (87, "A-"),
    (83, "B+"), (80, "B"), (77, "B-"),
    (73, "C+"), (70, "C"), (67, "C-"),
    (60, "D"),
)


def seed_hash(seed: str) -> int:
    """Signed 32-bit ``h = h*31 + c`` over the UTF-16 code units of ``seed``."""
    h = 0
    data = seed.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


class SeededRandom:
    """Park-Miller minimal standard generator seeded from a string."""

    def __init__(self, seed: str):
        self.state = seed_hash(seed) % MODULUS or 1

    def random(self) -> float:
        self.state = (self.state * MULTIPLIER) % MODULUS
        return self.state / MODULUS

    __call__ = random


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def grade_from_score(score: int) -> str:
    for floor, grade in _GRADE_FLOORS:
        if score >= floor:
            return grade
    return "F"


# -----------------------------------------------------------------------------
# Campaign finance
# -----------------------------------------------------------------------------
def campaign_finance(entity_id: str, party: str, level: str) -> CampaignFinance:
    rand = SeededRandom(f"{entity_id}-finance")
    mult = LEVEL_MULTIPLIERS.get(level, DEFAULT_LEVEL_MULTIPLIER)

    total_raised = round_half_up((800_000 + rand() * 4_200_000) * mult)
    total_spent = round_half_up(total_raised * (0.6 + rand() * 0.3))

    names = DONOR_NAMES.get(party) or DONOR_NAMES["Independent"]
    picked = names[: 8 + math.floor(rand() * 4)]
    donors = []
    for name in picked:
        amount = round_half_up((5000 + rand() * 45_000) * mult)
        donor_type = DONOR_TYPES[math.floor(rand() * len(DONOR_TYPES))]
        donors.append(Donor(name=name, amount=amount, type=donor_type))
    donors.sort(key=lambda d: d.amount, reverse=True)

    weights = [round_half_up(rand() * 100) for _ in SPENDING_CATEGORIES]
    weight_total = sum(weights)
    breakdown = [
        SpendingCategory(
            category=category,
            amount=round_half_up(weight / weight_total * total_spent) if weight_total else 0,
        )
        for category, weight in zip(SPENDING_CATEGORIES, weights)
    ]

    trend = []
    for i, month in enumerate(MONTHS):
        # second half of the year runs hotter
        seasonal = 1.3 + rand() * 0.5 if i >= 6 else 0.6 + rand() * 0.6
        raised = round_half_up(total_raised / 12 * seasonal)
        spent = round_half_up(raised * (0.5 + rand() * 0.5))
        trend.append(FundraisingMonth(month=month, raised=raised, spent=spent))

    return CampaignFinance(
        entity_id=entity_id,
        total_raised=total_raised,
        total_spent=total_spent,
        cash_on_hand=total_raised - total_spent,
        cycle=FINANCE_CYCLE,
        top_donors=donors[:10],
        spending_breakdown=breakdown,
        fundraising_trend=trend,
    )


# -----------------------------------------------------------------------------
# Voting record
# -----------------------------------------------------------------------------
def _is_key_issue(issue: str, key_issues: Iterable[str]) -> bool:
    issue_lc = issue.lower()
    issue_head = issue_lc.split(" ")[0]
    for key in key_issues:
        key_lc = key.strip().lower()
        if not key_lc:
            continue
        if key_lc.split(" ")[0] in issue_lc or issue_head in key_lc:
            return True
    return False


def voting_record(entity_id: str, key_issues: Optional[List[str]] = None, party: str = "") -> VotingRecord:
    rand = SeededRandom(entity_id)
    key_issues = key_issues or []

    grades: List[IssueGrade] = []
    for issue in ISSUE_CATEGORIES:
        base = 75 + rand() * 20 if _is_key_issue(issue, key_issues) else 50 + rand() * 40
        score = round_half_up(min(98, max(35, base)))
        total = round_half_up(8 + rand() * 12)
        votes_for = round_half_up(total * score / 100)
        abstain = round_half_up(rand() * 2)
        grades.append(
            IssueGrade(
                issue=issue,
                grade=grade_from_score(score),
                score=score,
                votes_for=votes_for,
                votes_against=max(0, total - votes_for - abstain),
                votes_abstain=abstain,
            )
        )

    lean = 0.65 if party == "Democrat" else 0.55
    key_votes = []
    for bill in SAMPLE_BILLS:
        r = rand()
        if r > 0.15:
            vote = "Yes" if rand() < lean else "No"
        elif r > 0.05:
            vote = "Abstain"
        else:
            vote = "Not Voting"
        key_votes.append(
            KeyVote(bill_number=bill.number, title=bill.title, date=bill.date, vote=vote, result=bill.result)
        )

    overall = round_half_up(sum(g.score for g in grades) / len(grades))
    grades.sort(key=lambda g: g.score, reverse=True)

    return VotingRecord(
        entity_id=entity_id,
        overall_score=overall,
        issue_grades=grades,
        key_votes=key_votes,
        total_votes=round_half_up(80 + rand() * 60),
        attendance=round_half_up(85 + rand() * 14),
    )
