"""Utility for resolving donor references typed by staff."""

from typing import Optional
from offerbook.domain.donor import DonorService
from offerbook.domain.entities import Donor


def resolve_donor(donor_service: DonorService, reference: str) -> Optional[Donor]:
    """Resolve an offering number, "#<id>" or exact name to an active donor.

    Args:
        donor_service: DonorService instance
        reference: Offering number (e.g. "122"), donor ID prefixed with
            "#" (e.g. "#7"), or the donor's exact name

    Returns:
        Matching donor, or None when nothing matches (the text is then
        treated as a free-text name)

    Raises:
        ValueError: If a "#<id>" reference does not name an active donor
    """
    reference = reference.strip()
    if not reference:
        return None

    # Explicit ID reference
    if reference.startswith("#"):
        try:
            donor_id = int(reference[1:])
        except ValueError:
            raise ValueError(f"Invalid donor ID '{reference}'")
        donor = donor_service.get_donor(donor_id)
        if donor is None or not donor.is_active:
            raise ValueError(f"Donor ID {donor_id} not found")
        return donor

    donor = donor_service.find_by_offering_number(reference)
    if donor is not None:
        return donor

    return donor_service.find_by_name(reference)
