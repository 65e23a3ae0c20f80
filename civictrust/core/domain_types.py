"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - OrganizationId, CampaignId, DonationId are 1-based monotonic integers
    - Address is always normalized (stripped, lower-case) before comparison or storage
    - Timestamp is a non-negative logical integer (epoch seconds in production)
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OrganizationId = NewType("OrganizationId", int)
CampaignId = NewType("CampaignId", int)
DonationId = NewType("DonationId", int)
Address = NewType("Address", str)


# ─── Value Types ─────────────────────────────────────────────────

Timestamp = NewType("Timestamp", int)   # logical, >= 0
Amount = NewType("Amount", int)         # smallest currency unit, > 0


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """Mutation kinds admitted by the ledger core."""
    REGISTER_ORGANIZATION = "register_organization"
    VERIFY_ORGANIZATION = "verify_organization"
    REJECT_ORGANIZATION = "reject_organization"
    TRANSFER_AUTHORITY = "transfer_authority"
    CREATE_CAMPAIGN = "create_campaign"
    DEACTIVATE_CAMPAIGN = "deactivate_campaign"
    RECORD_DONATION = "record_donation"


class Outcome(str, Enum):
    """Result of an admitted mutation. Every attempt ends in one of these."""
    COMMITTED = "committed"
    REJECTED = "rejected"


def normalize_address(value: str) -> Address:
    """Strip and lower-case an identity string. Hex wallet addresses compare case-insensitively."""
    return Address(value.strip().lower())
