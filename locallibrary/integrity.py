"""Relation integrity: decide whether a record may be deleted.

Deletion is refused while other records still reference the target. Nothing
is ever cascaded; the caller is handed the blocking records and decides what
to show.

    Author       <- Book.author
    Genre        <- Book.genre (set membership)
    Book         <- BookInstance.book
    BookInstance    (leaf, always deletable)
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .errors import HasDependentsError
from .models import EntityKind

logger = logging.getLogger(__name__)

# kind -> (dependent kind, field on the dependent that references kind)
DEPENDENTS = {
    EntityKind.AUTHOR: (EntityKind.BOOK, "author"),
    EntityKind.GENRE: (EntityKind.BOOK, "genre"),
    EntityKind.BOOK: (EntityKind.BOOK_INSTANCE, "book"),
    EntityKind.BOOK_INSTANCE: None,
}


@dataclass(frozen=True)
class DeleteCheck:
    deletable: bool
    blockers: List = field(default_factory=list)


class RelationIntegrity:
    """Check-then-delete for every entity kind."""

    def __init__(self, repository):
        self.repository = repository

    def check_deletable(self, kind: EntityKind, record_id) -> DeleteCheck:
        dependent = DEPENDENTS[kind]
        if dependent is None:
            return DeleteCheck(deletable=True)
        dependent_kind, relation_field = dependent
        blockers = self.repository.find_by_relation(dependent_kind, relation_field, record_id)
        return DeleteCheck(deletable=not blockers, blockers=blockers)

    def delete(self, kind: EntityKind, record_id) -> None:
        """Delete one record if nothing references it.

        Raises:
            HasDependentsError: dependents exist; nothing was deleted.
            RecordNotFoundError: the id does not resolve (already gone).
        """
        # TODO: lock the target row (SELECT ... FOR UPDATE) between the check
        # and the delete on backends that support it; a dependent created in
        # between is not caught today.
        check = self.check_deletable(kind, record_id)
        if not check.deletable:
            logger.warning(
                "Refusing to delete %s %s: %d dependent record(s)",
                kind.value, record_id, len(check.blockers),
            )
            raise HasDependentsError(kind, record_id, check.blockers)
        self.repository.delete_by_id(kind, record_id)
