"""Exception hierarchy for the catalog."""

from typing import Optional


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class StoreError(CatalogError):
    """Database operation failed."""


class RecordNotFoundError(CatalogError):
    """No record of the given kind has the given id."""

    def __init__(self, kind, record_id):
        super().__init__(f"{kind.label} not found", {"kind": kind.value, "id": record_id})
        self.kind = kind
        self.record_id = record_id


class RelationIntegrityError(CatalogError):
    """A write would leave dangling references behind."""


class HasDependentsError(RelationIntegrityError):
    """Delete refused because other records still reference the target."""

    def __init__(self, kind, record_id, blockers):
        super().__init__(
            f"{kind.label} {record_id} is still referenced",
            {"kind": kind.value, "id": record_id, "blockers": len(blockers)},
        )
        self.kind = kind
        self.record_id = record_id
        self.blockers = list(blockers)
