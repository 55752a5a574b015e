"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistenceError(DomainError):
    """The persistence gateway failed to read or write."""


class CommitInProgressError(DomainError):
    """A batch commit is already being submitted."""


class SyncConfigurationError(DomainError):
    """Sync cannot start: no endpoint configured or nothing pending."""


class SyncTransportError(DomainError):
    """The outbound sync call failed at the transport level."""


def donor_not_found(donor_id: int) -> str:
    """Return message for missing donor."""
    return f"Donor {donor_id} not found"


def offering_type_not_found(code: str) -> str:
    """Return message for missing offering type code."""
    return f"Offering type '{code}' not found"


def record_not_found(record_id: int) -> str:
    """Return message for missing offering record."""
    return f"Record {record_id} not found"


def invalid_amount(raw: str) -> str:
    """Return message for an amount that is not a finite non-negative number."""
    return f"Invalid amount '{raw}': expected a non-negative number"


def nothing_to_sync() -> str:
    """Return message when the pending sync set is empty."""
    return "There are no records waiting to be synced"


def sync_url_missing() -> str:
    """Return message when no spreadsheet webhook is configured."""
    return (
        "No spreadsheet webhook URL is configured. "
        "Set one with 'offerbook sync url <URL>' first."
    )
