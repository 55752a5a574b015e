"""Donor domain service."""

from dataclasses import replace
from typing import Optional
from offerbook.database.base import Database
from offerbook.domain.entities import Donor
from offerbook.domain.errors import NotFoundError, ValidationError, donor_not_found


def donor_sort_key(donor: Donor) -> tuple:
    """Numbered donors first by number, then unnumbered by name."""
    number = (donor.offering_number or "").strip()
    if number.isdecimal():
        return (0, int(number), donor.name)
    return (1, 0, donor.name)


class DonorService:
    """Service for managing donors."""

    def __init__(self, db: Database):
        """Initialize donor service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_donors(self) -> list[Donor]:
        """List active donors ordered by offering number, then name.

        Returns:
            List of donor entities
        """
        return sorted(self.db.list_donors(), key=donor_sort_key)

    def search(self, query: str, limit: Optional[int] = None) -> list[Donor]:
        """Find active donors whose name or offering number contains query.

        Args:
            query: Case-insensitive search text
            limit: Optional maximum number of results

        Returns:
            Matching donors in list order
        """
        query = query.strip().lower()
        if not query:
            return []
        matches = [
            d
            for d in self.list_donors()
            if query in d.name.lower() or (d.offering_number and query in d.offering_number)
        ]
        return matches[:limit] if limit is not None else matches

    def get_donor(self, donor_id: int) -> Optional[Donor]:
        """Get donor by ID.

        Args:
            donor_id: Donor ID

        Returns:
            Donor entity or None if not found
        """
        return self.db.get_donor(donor_id)

    def find_by_offering_number(self, offering_number: str) -> Optional[Donor]:
        """Get the active donor holding an offering number."""
        offering_number = offering_number.strip()
        for donor in self.db.list_donors():
            if donor.offering_number == offering_number:
                return donor
        return None

    def find_by_name(self, name: str) -> Optional[Donor]:
        """Get an active donor by exact name."""
        return self.db.find_active_donor_by_name(name.strip())

    def save_donor(
        self,
        name: str,
        offering_number: Optional[str] = None,
        note: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        donor_id: Optional[int] = None,
    ) -> Donor:
        """Create a donor, or update one when donor_id is given.

        Args:
            name: Display name
            offering_number: Optional offering number
            note: Optional note
            phone: Optional phone number
            email: Optional email address
            address: Optional postal address
            donor_id: ID of the donor to update

        Returns:
            The stored donor

        Raises:
            ValidationError: If name is empty
            NotFoundError: If donor_id does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Donor name is required")

        if donor_id is not None:
            existing = self.db.get_donor(donor_id)
            if existing is None:
                raise NotFoundError(donor_not_found(donor_id))
            donor = replace(
                existing,
                name=name,
                offering_number=_clean(offering_number, existing.offering_number),
                note=_clean(note, existing.note),
                phone=_clean(phone, existing.phone),
                email=_clean(email, existing.email),
                address=_clean(address, existing.address),
            )
        else:
            donor = Donor(
                id=None,
                name=name,
                offering_number=_clean(offering_number, None),
                note=_clean(note, None),
                phone=_clean(phone, None),
                email=_clean(email, None),
                address=_clean(address, None),
            )
        return self.db.upsert_donor(donor)

    def deactivate_donor(self, donor_id: int) -> None:
        """Deactivate a donor. Past records keep their captured name.

        Raises:
            NotFoundError: If donor doesn't exist
        """
        if self.db.get_donor(donor_id) is None:
            raise NotFoundError(donor_not_found(donor_id))
        self.db.deactivate_donor(donor_id)


def _clean(value: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """Keep fallback when value is None; blank strings clear the field."""
    if value is None:
        return fallback
    return value.strip() or None
