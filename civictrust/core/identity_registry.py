"""Identity Registry — organization records, uniqueness slots and the administrative authority.

Invariants:
    - registration_number, tax_id and controlling_address are each unique among
      ACTIVE organizations; reject() frees all three slots for reuse
    - Organization ids start at 1, are never reused and never derived from collection size
    - Identity fields never change after register(); only verified/active do
    - Exactly one administrative authority at any time, replaced only by transfer_authority()
    - Every mutation validates completely before touching state (no partial application)

Design Decisions:
    - Authority is an explicit field of this registry, never a module global
    - Uniqueness enforced with three slot dicts (value -> id) holding active orgs only
    - Not thread-safe on its own: LedgerCore serializes every mutation
"""

from dataclasses import replace

from civictrust.core.domain_types import Address, OrganizationId
from civictrust.core.errors import (
    AlreadyVerifiedError,
    DuplicateIdentityError,
    NotFoundError,
    UnauthorizedError,
)
from civictrust.core.records import Organization
from civictrust.core.validate_input import require_address, require_text


class IdentityRegistry:
    """Owns every Organization. Reads return frozen snapshots."""

    def __init__(self, authority: str):
        self._authority: Address = require_address(authority, "authority")
        self._organizations: dict[OrganizationId, Organization] = {}
        self._next_id = 1
        # slot value -> owning active organization id
        self._by_registration: dict[str, OrganizationId] = {}
        self._by_tax_id: dict[str, OrganizationId] = {}
        self._by_wallet: dict[Address, OrganizationId] = {}

    # ─── Authority ───────────────────────────────────────────────

    @property
    def authority(self) -> Address:
        return self._authority

    def is_authority(self, caller: str) -> bool:
        return require_address(caller, "caller") == self._authority

    def _require_authority(self, caller: str, action: str) -> None:
        if not self.is_authority(caller):
            raise UnauthorizedError(
                f"Only the administrative authority may {action}",
            )

    def transfer_authority(self, new_address: str, caller: str) -> None:
        """Replace the authority. The old holder loses every admin capability."""
        self._require_authority(caller, "transfer authority")
        self._authority = require_address(new_address, "new_address")

    # ─── Mutations ───────────────────────────────────────────────

    def register(
        self,
        name: str,
        registration_number: str,
        tax_id: str,
        controlling_address: str,
    ) -> OrganizationId:
        """Self-service registration. New organizations start unverified and active."""
        name = require_text(name, "name")
        registration_number = require_text(registration_number, "registration_number")
        tax_id = require_text(tax_id, "tax_id")
        wallet = require_address(controlling_address, "controlling_address")

        collisions = []
        if registration_number in self._by_registration:
            collisions.append("registration_number")
        if tax_id in self._by_tax_id:
            collisions.append("tax_id")
        if wallet in self._by_wallet:
            collisions.append("controlling_address")
        if collisions:
            raise DuplicateIdentityError(collisions)

        org_id = OrganizationId(self._next_id)
        self._next_id += 1
        self._organizations[org_id] = Organization(
            id=org_id,
            name=name,
            registration_number=registration_number,
            tax_id=tax_id,
            controlling_address=wallet,
        )
        self._by_registration[registration_number] = org_id
        self._by_tax_id[tax_id] = org_id
        self._by_wallet[wallet] = org_id
        return org_id

    def verify(self, organization_id: OrganizationId, caller: str) -> None:
        self._require_authority(caller, "verify organizations")
        org = self._active_or_404(organization_id)
        if org.verified:
            raise AlreadyVerifiedError(organization_id)
        self._organizations[org.id] = replace(org, verified=True)

    def reject(self, organization_id: OrganizationId, caller: str) -> None:
        """Remove an organization and release its uniqueness slots."""
        self._require_authority(caller, "reject organizations")
        org = self._active_or_404(organization_id)
        self._organizations[org.id] = replace(org, active=False)
        del self._by_registration[org.registration_number]
        del self._by_tax_id[org.tax_id]
        del self._by_wallet[org.controlling_address]

    # ─── Queries ─────────────────────────────────────────────────

    def lookup(self, organization_id: OrganizationId) -> Organization | None:
        """Any organization ever registered, removed ones included. No NotFound."""
        return self._organizations.get(organization_id)

    def by_id(self, organization_id: OrganizationId) -> Organization:
        return self._active_or_404(organization_id)

    def by_wallet(self, address: str) -> Organization:
        return self._slot_or_404(self._by_wallet, require_address(address, "address"), "wallet")

    def by_registration_number(self, registration_number: str) -> Organization:
        return self._slot_or_404(
            self._by_registration, registration_number.strip(), "registration number",
        )

    def by_tax_id(self, tax_id: str) -> Organization:
        return self._slot_or_404(self._by_tax_id, tax_id.strip(), "tax id")

    def list(self) -> list[Organization]:
        """Every organization ever registered, ordered by id, removed ones included."""
        return list(self._organizations.values())

    def count(self) -> int:
        """Organizations ever registered (the id counter, not the active count)."""
        return self._next_id - 1

    # ─── Helpers ─────────────────────────────────────────────────

    def _active_or_404(self, organization_id: OrganizationId) -> Organization:
        org = self._organizations.get(organization_id)
        if org is None or not org.active:
            raise NotFoundError("Organization", organization_id)
        return org

    def _slot_or_404(self, slots: dict, key: str, label: str) -> Organization:
        org_id = slots.get(key)
        if org_id is None:
            raise NotFoundError(f"Organization with {label}", key)
        return self._organizations[org_id]
