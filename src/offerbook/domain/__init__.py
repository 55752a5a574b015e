"""Domain layer for offerbook application."""

_SERVICES = {
    "BudgetService": "offerbook.domain.budget",
    "CommitEngine": "offerbook.domain.commit",
    "DonorService": "offerbook.domain.donor",
    "OfferingTypeService": "offerbook.domain.offering_type",
    "PendingLedger": "offerbook.domain.ledger",
    "RecordService": "offerbook.domain.record",
    "ReportService": "offerbook.domain.reports",
    "SheetSync": "offerbook.domain.sync",
    "SyncMarker": "offerbook.domain.sync",
}

__all__ = list(_SERVICES)


# Import services lazily so the database layer can import domain.entities
# without pulling in the services that depend on it
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
