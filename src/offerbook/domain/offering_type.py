"""Offering type (donation category) domain service."""

from typing import Optional
from offerbook.database.base import Database
from offerbook.domain.entities import OfferingType
from offerbook.domain.errors import NotFoundError, ValidationError, offering_type_not_found


def normalize_code(code: str) -> str:
    """Strip and uppercase an offering type code."""
    return (code or "").strip().upper()


class OfferingTypeService:
    """Service for managing offering types."""

    def __init__(self, db: Database):
        """Initialize offering type service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_types(self) -> list[OfferingType]:
        """List active offering types ordered by code."""
        return self.db.list_offering_types()

    def get_type(self, code: str) -> Optional[OfferingType]:
        """Get an offering type by (normalized) code."""
        return self.db.get_offering_type(normalize_code(code))

    def require_type(self, code: str) -> OfferingType:
        """Get an active offering type by code.

        Raises:
            NotFoundError: If the code is unknown or inactive
        """
        offering_type = self.get_type(code)
        if offering_type is None or not offering_type.is_active:
            raise NotFoundError(offering_type_not_found(normalize_code(code)))
        return offering_type

    def save_type(
        self,
        code: str,
        label: str,
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> OfferingType:
        """Create or update an offering type.

        Args:
            code: Short code; stored uppercase
            label: Display label
            category: Optional budget grouping
            description: Optional description

        Returns:
            The saved offering type

        Raises:
            ValidationError: If code or label is empty
        """
        code = normalize_code(code)
        if not code:
            raise ValidationError("Offering type code is required")
        label = (label or "").strip()
        if not label:
            raise ValidationError("Offering type label is required")

        offering_type = OfferingType(
            code=code,
            label=label,
            category=(category or "").strip() or None,
            description=(description or "").strip() or None,
        )
        self.db.upsert_offering_type(offering_type)
        return offering_type
