"""Static reference tables.

Everything here is immutable and handed to components at construction time;
nothing in the codebase mutates these at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# -----------------------------------------------------------------------------
# States
# -----------------------------------------------------------------------------
STATE_FIPS: Mapping[str, str] = MappingProxyType({
    "AL": "01", "AK": "02", "AZ": "04", "AR": "05", "CA": "06", "CO": "08", "CT": "09", "DE": "10",
    "FL": "12", "GA": "13", "HI": "15", "ID": "16", "IL": "17", "IN": "18", "IA": "19", "KS": "20",
    "KY": "21", "LA": "22", "ME": "23", "MD": "24", "MA": "25", "MI": "26", "MN": "27", "MS": "28",
    "MO": "29", "MT": "30", "NE": "31", "NV": "32", "NH": "33", "NJ": "34", "NM": "35", "NY": "36",
    "NC": "37", "ND": "38", "OH": "39", "OK": "40", "OR": "41", "PA": "42", "RI": "44", "SC": "45",
    "SD": "46", "TN": "47", "TX": "48", "UT": "49", "VT": "50", "VA": "51", "WA": "53", "WV": "54",
    "WI": "55", "WY": "56", "DC": "11", "PR": "72",
})

STATE_NAMES: Mapping[str, str] = MappingProxyType({
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "FL": "Florida", "GA": "Georgia",
    "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi", "MO": "Missouri",
    "MT": "Montana", "NE": "Nebraska", "NV": "Nevada", "NH": "New Hampshire", "NJ": "New Jersey",
    "NM": "New Mexico", "NY": "New York", "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont",
    "VA": "Virginia", "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
    "DC": "District of Columbia", "PR": "Puerto Rico",
})


@dataclass(frozen=True)
class ChamberSizes:
    """Number of single-member districts drawn for each legislative chamber."""

    upper: int
    lower: int


# Only states whose district counts equal their TIGERweb feature counts.
# States with multi-member or equal-sized chambers (AZ, ID, NJ, ND, SD, WA, ...)
# and unicameral Nebraska are left out and fall back to the size heuristic.
CHAMBER_SIZES: Mapping[str, ChamberSizes] = MappingProxyType({
    "AL": ChamberSizes(35, 105), "AK": ChamberSizes(20, 40), "AR": ChamberSizes(35, 100),
    "CA": ChamberSizes(40, 80), "CO": ChamberSizes(35, 65), "CT": ChamberSizes(36, 151),
    "DE": ChamberSizes(21, 41), "FL": ChamberSizes(40, 120), "GA": ChamberSizes(56, 180),
    "HI": ChamberSizes(25, 51), "IL": ChamberSizes(59, 118), "IN": ChamberSizes(50, 100),
    "IA": ChamberSizes(50, 100), "KS": ChamberSizes(40, 125), "KY": ChamberSizes(38, 100),
    "LA": ChamberSizes(39, 105), "ME": ChamberSizes(35, 151), "MA": ChamberSizes(40, 160),
    "MI": ChamberSizes(38, 110), "MN": ChamberSizes(67, 134), "MS": ChamberSizes(52, 122),
    "MO": ChamberSizes(34, 163), "MT": ChamberSizes(50, 100), "NV": ChamberSizes(21, 42),
    "NM": ChamberSizes(42, 70), "NY": ChamberSizes(63, 150), "NC": ChamberSizes(50, 120),
    "OH": ChamberSizes(33, 99), "OK": ChamberSizes(48, 101), "OR": ChamberSizes(30, 60),
    "PA": ChamberSizes(50, 203), "RI": ChamberSizes(38, 75), "SC": ChamberSizes(46, 124),
    "TN": ChamberSizes(33, 99), "TX": ChamberSizes(31, 150), "UT": ChamberSizes(29, 75),
    "VA": ChamberSizes(40, 100), "WI": ChamberSizes(33, 99), "WY": ChamberSizes(31, 62),
})


def state_fips(state_abbr: str) -> Optional[str]:
    return STATE_FIPS.get((state_abbr or "").strip().upper())


def state_abbr(value: str) -> Optional[str]:
    """Two-letter code for a state given by code or full name."""
    text = (value or "").strip()
    if text.upper() in STATE_NAMES:
        return text.upper()
    for abbr, name in STATE_NAMES.items():
        if name.lower() == text.lower():
            return abbr
    return None


# -----------------------------------------------------------------------------
# Relevance keywords
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RelevanceKeywords:
    """Political-context words that qualify a bare surname or state match."""

    name_context: Tuple[str, ...] = (
        "senator", "senate", "governor", "congress", "election", "vote", "primary",
        "campaign", "representative", "house", "democrat", "republican", "president",
        "political",
    )
    jurisdiction_context: Tuple[str, ...] = (
        "senator", "senate", "governor", "election", "congress", "house", "primary",
        "vote", "ballot",
    )


DEFAULT_RELEVANCE_KEYWORDS = RelevanceKeywords()


# -----------------------------------------------------------------------------
# Synthetic profile tables
# -----------------------------------------------------------------------------
DONOR_TYPES: Tuple[str, ...] = ("Individual", "PAC", "Corporation", "Union", "Self")

DONOR_NAMES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Democrat": (
        "EMILY's List", "League of Conservation Voters", "Planned Parenthood Action",
        "SEIU COPE", "AFL-CIO", "NextGen Climate Action", "Everytown for Gun Safety",
        "American Federation of Teachers", "National Education Association", "Sierra Club",
        "Culinary Workers Union Local 226", "IBEW Local 357", "Nevada State AFL-CIO",
        "Clark County Education Association", "Democratic Senatorial Campaign Cmte",
    ),
    "Republican": (
        "National Rifle Association", "U.S. Chamber of Commerce", "Koch Industries",
        "Senate Leadership Fund", "Club for Growth", "National Assoc. of Realtors",
        "American Medical Association", "Las Vegas Sands Corp", "Wynn Resorts",
        "Nevada Mining Association", "National Right to Life", "Republican Governors Assn",
        "Freedom Partners", "Nevada Resort Association", "Boyd Gaming Corp",
    ),
    "Independent": (
        "No Labels", "Forward Party", "Unite America", "Represent.Us",
        "Issue One", "Independent Voter Project", "Centrist Project",
        "Nevada Independents PAC", "Business Forward", "Common Ground Committee",
    ),
    "Nonpartisan": (
        "Local Business Coalition", "Community Leaders PAC", "Nevada Civic Fund",
        "Citizens for Accountability", "Good Government PAC", "Neighborhood Alliance",
    ),
})

SPENDING_CATEGORIES: Tuple[str, ...] = (
    "Media & Advertising",
    "Staff & Consultants",
    "Fundraising",
    "Travel & Events",
    "Communications",
    "Polling & Research",
    "Administrative",
)

LEVEL_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "federal": 1.0,
    "state": 0.15,
    "county": 0.04,
    "local": 0.02,
})
DEFAULT_LEVEL_MULTIPLIER = 0.1

MONTHS: Tuple[str, ...] = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

FINANCE_CYCLE = "2025-2026"

ISSUE_CATEGORIES: Tuple[str, ...] = (
    "Education",
    "Healthcare",
    "Environment",
    "Public Safety",
    "Economy & Jobs",
    "Housing",
    "Civil Rights",
    "Infrastructure",
    "Tax Policy",
    "Immigration",
)


@dataclass(frozen=True)
class SampleBill:
    number: str
    title: str
    date: str
    result: str


SAMPLE_BILLS: Tuple[SampleBill, ...] = (
    SampleBill("AB1", "Fort Mohave Valley Land Regulations", "2025-03-15", "Passed"),
    SampleBill("SB42", "Renewable Energy Standards Update", "2025-03-22", "Passed"),
    SampleBill("AB108", "Outdoor Education Grant Program", "2025-04-01", "Passed"),
    SampleBill("SB78", "Medicaid Expansion Provisions", "2025-04-10", "Failed"),
    SampleBill("AB165", "K-12 Funding Formula Revision", "2025-04-18", "Passed"),
    SampleBill("SB201", "Criminal Sentencing Reform", "2025-04-25", "Failed"),
    SampleBill("AB224", "Affordable Housing Tax Credits", "2025-05-02", "Passed"),
    SampleBill("SB155", "Water Conservation Standards", "2025-05-10", "Passed"),
    SampleBill("AB302", "Public Employee Collective Bargaining", "2025-05-15", "Failed"),
    SampleBill("SB290", "Cannabis Industry Regulations", "2025-05-20", "Passed"),
)
