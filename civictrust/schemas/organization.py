"""Organization Schemas — Pydantic models for registration requests and organization snapshots.

Invariants:
    - OrganizationRegister fields: 1-200 chars, stripped, non-empty
    - The controlling address is NOT part of the body; it is the authenticated caller

Design Decisions:
    - field_validator for side-effect-free transforms (strip)
"""

from pydantic import BaseModel, Field, field_validator

from civictrust.core.records import Organization


class OrganizationRegister(BaseModel):
    """Self-service registration body."""
    name: str = Field(min_length=1, max_length=200)
    registration_number: str = Field(min_length=1, max_length=100)
    tax_id: str = Field(min_length=1, max_length=100)

    @field_validator("name", "registration_number", "tax_id")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class OrganizationResponse(BaseModel):
    """Organization snapshot. `active` false means rejected/removed."""
    id: int
    name: str
    registration_number: str
    tax_id: str
    controlling_address: str
    verified: bool
    active: bool

    @classmethod
    def from_record(cls, org: Organization) -> "OrganizationResponse":
        return cls(**org.to_dict())


class OrganizationList(BaseModel):
    organizations: list[OrganizationResponse] = []


class AuthorityResponse(BaseModel):
    authority: str


class AuthorityTransfer(BaseModel):
    new_address: str = Field(min_length=1, max_length=255)
