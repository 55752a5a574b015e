"""Abstract database interface (the persistence gateway)."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from offerbook.domain.entities import (
    BudgetRecord,
    Donor,
    DonorDailyTotal,
    MonthlyTotal,
    NewOfferingRecord,
    OfferingRecord,
    OfferingType,
    RecordFilter,
)


class Database(ABC):
    """Abstract database interface for offerbook.

    Implementations raise PersistenceError for any failure of the
    underlying store.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Donor operations
    @abstractmethod
    def list_donors(self) -> list[Donor]:
        """List active donors."""
        pass

    @abstractmethod
    def get_donor(self, donor_id: int) -> Optional[Donor]:
        """Get donor by ID, active or not."""
        pass

    @abstractmethod
    def find_active_donor_by_name(self, name: str) -> Optional[Donor]:
        """Find an active donor whose name matches exactly."""
        pass

    @abstractmethod
    def upsert_donor(self, donor: Donor) -> Donor:
        """Insert the donor if it has no ID, else update it. Returns the stored donor."""
        pass

    @abstractmethod
    def deactivate_donor(self, donor_id: int) -> None:
        """Flag a donor inactive. Donors are never hard-deleted."""
        pass

    # Offering type operations
    @abstractmethod
    def list_offering_types(self) -> list[OfferingType]:
        """List active offering types ordered by code."""
        pass

    @abstractmethod
    def get_offering_type(self, code: str) -> Optional[OfferingType]:
        """Get offering type by code."""
        pass

    @abstractmethod
    def upsert_offering_type(self, offering_type: OfferingType) -> None:
        """Insert or update an offering type (reactivating it)."""
        pass

    # Record operations
    @abstractmethod
    def list_records(self, record_filter: Optional[RecordFilter] = None) -> list[OfferingRecord]:
        """List records, newest first, with optional year/month/ids filters."""
        pass

    @abstractmethod
    def get_record(self, record_id: int) -> Optional[OfferingRecord]:
        """Get record by ID."""
        pass

    @abstractmethod
    def insert_records(self, records: Sequence[NewOfferingRecord]) -> list[int]:
        """Insert a batch of records. All succeed or none do. Returns new IDs."""
        pass

    @abstractmethod
    def update_record(self, record: OfferingRecord) -> None:
        """Update an existing record."""
        pass

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Hard-delete a record."""
        pass

    # Budget operations
    @abstractmethod
    def list_budgets(self, year: int) -> list[BudgetRecord]:
        """List budget lines for a year."""
        pass

    @abstractmethod
    def upsert_budget(self, budget: BudgetRecord) -> None:
        """Insert or replace the budget line for (year, code)."""
        pass

    # Settings operations
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a setting value, or None if unset."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Set a setting value."""
        pass

    # Pre-aggregated reads
    @abstractmethod
    def monthly_totals(self, year: int) -> list[MonthlyTotal]:
        """Total offerings per month of a year (months with no records omitted)."""
        pass

    @abstractmethod
    def monthly_totals_by_donor(self, offering_number: str) -> list[DonorDailyTotal]:
        """Totals per day and code for one offering number, oldest first."""
        pass
