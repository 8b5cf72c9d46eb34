"""Seeded profile generator tests"""

import pytest

from repwatch.core.reference import ISSUE_CATEGORIES, SAMPLE_BILLS
from repwatch.services.synthetic import (
    MODULUS,
    SeededRandom,
    campaign_finance,
    grade_from_score,
    round_half_up,
    seed_hash,
    voting_record,
)


class TestSeedHash:
    def test_known_values(self):
        assert seed_hash("") == 0
        assert seed_hash("a") == 97
        assert seed_hash("ab") == 97 * 31 + 98

    def test_wraps_to_signed_32_bit(self):
        value = seed_hash("a fairly long seed string that overflows")
        assert -(2 ** 31) <= value < 2 ** 31


class TestSeededRandom:
    def test_same_seed_same_sequence(self):
        a, b = SeededRandom("nv-sen-1"), SeededRandom("nv-sen-1")
        assert [a() for _ in range(20)] == [b() for _ in range(20)]

    def test_different_seeds_diverge(self):
        a, b = SeededRandom("nv-sen-1"), SeededRandom("nv-sen-2")
        assert [a() for _ in range(5)] != [b() for _ in range(5)]

    def test_empty_seed_starts_at_one(self):
        rand = SeededRandom("")
        assert rand.state == 1
        assert rand() == 16807 / MODULUS

    def test_values_in_unit_interval(self):
        rand = SeededRandom("range-check")
        for _ in range(500):
            assert 0 < rand() < 1


class TestHelpers:
    @pytest.mark.parametrize(
        "score,grade",
        [(98, "A+"), (93, "A+"), (92, "A"), (87, "A-"), (83, "B+"), (80, "B"),
         (77, "B-"), (73, "C+"), (70, "C"), (67, "C-"), (60, "D"), (59, "F"), (35, "F")],
    )
    def test_grade_thresholds(self, score, grade):
        assert grade_from_score(score) == grade

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2


class TestCampaignFinance:
    def test_deterministic(self):
        first = campaign_finance("rep-123", "Democrat", "federal")
        second = campaign_finance("rep-123", "Democrat", "federal")
        assert first.model_dump() == second.model_dump()

    def test_different_entities_differ(self):
        a = campaign_finance("rep-123", "Democrat", "federal")
        b = campaign_finance("rep-456", "Democrat", "federal")
        assert a.total_raised != b.total_raised

    def test_invariants(self):
        data = campaign_finance("rep-123", "Republican", "state")
        assert data.cash_on_hand == data.total_raised - data.total_spent
        assert 0.6 * data.total_raised - 1 <= data.total_spent <= 0.9 * data.total_raised + 1
        assert 8 <= len(data.top_donors) <= 10
        amounts = [d.amount for d in data.top_donors]
        assert amounts == sorted(amounts, reverse=True)
        assert len(data.fundraising_trend) == 12
        assert data.fundraising_trend[0].month == "Jan"
        assert data.cycle == "2025-2026"

    def test_level_scales_totals(self):
        federal = campaign_finance("rep-123", "Democrat", "federal")
        local = campaign_finance("rep-123", "Democrat", "local")
        assert local.total_raised < federal.total_raised

    def test_unknown_party_uses_independent_donors(self):
        data = campaign_finance("rep-9", "Green", "federal")
        assert "No Labels" in {d.name for d in data.top_donors}

    def test_serializes_camel_case(self):
        dumped = campaign_finance("rep-1", "Democrat", "federal").model_dump(by_alias=True)
        assert {"entityId", "totalRaised", "cashOnHand", "topDonors"} <= set(dumped)


class TestVotingRecord:
    def test_deterministic(self):
        assert voting_record("rep-1", ["Education"]).model_dump() == voting_record("rep-1", ["Education"]).model_dump()

    def test_shape(self):
        record = voting_record("rep-1", party="Democrat")
        assert len(record.issue_grades) == len(ISSUE_CATEGORIES)
        assert [v.bill_number for v in record.key_votes] == [b.number for b in SAMPLE_BILLS]
        scores = [g.score for g in record.issue_grades]
        assert scores == sorted(scores, reverse=True)
        assert all(35 <= s <= 98 for s in scores)
        assert 80 <= record.total_votes <= 140
        assert 85 <= record.attendance <= 99
        for grade in record.issue_grades:
            assert grade.grade == grade_from_score(grade.score)
            assert grade.votes_against >= 0

    def test_key_issue_scores_high(self):
        record = voting_record("rep-1", ["Healthcare"])
        healthcare = next(g for g in record.issue_grades if g.issue == "Healthcare")
        assert healthcare.score >= 75

    def test_blank_key_issues_are_ignored(self):
        assert voting_record("rep-1", ["", "  "]).model_dump() == voting_record("rep-1").model_dump()
