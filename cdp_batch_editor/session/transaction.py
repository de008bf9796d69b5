"""
Staging of changes on detached clones.

Commands never edit a live thing from the cache. They check out a clone,
apply their edit to it and append a ThingTransaction, bound to the clone's
write context, to the ordered transaction list of the session. The list is
replayed in submission order when the session commits.
"""
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, List, Tuple, TypeVar

from cdp_batch_editor.model import EngineeringModel, Iteration, SiteDirectory, Thing

from .cache import ThingCache

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Thing)


class ChangeKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def checkout(thing: T) -> T:
    """Returns a detached copy of ``thing`` and every thing it contains."""
    clone = thing.model_copy(deep=True)
    clone.container = thing.container
    _restamp_containers(clone)
    return clone


def _restamp_containers(thing: Thing) -> None:
    for child in thing.contained():
        child.container = thing.iid
        _restamp_containers(child)


@dataclass(frozen=True)
class TransactionContext:
    route: str
    iteration_iid: str = ""


def resolve_context(thing: Thing, cache: ThingCache) -> TransactionContext:
    """
    Resolves the write context of a thing from its position in the containment
    hierarchy: things below an iteration are written in that iteration's context,
    anything else in the site directory context.
    """
    current = thing
    while current is not None:
        if isinstance(current, Iteration):
            model = cache.get_typed(current.container, EngineeringModel)
            model_iid = model.iid if model is not None else current.container or ""
            return TransactionContext(
                route=f"/EngineeringModel/{model_iid}/iteration/{current.iid}",
                iteration_iid=current.iid,
            )
        if isinstance(current, SiteDirectory):
            return TransactionContext(route=f"/SiteDirectory/{current.iid}")
        current = cache.get(current.container)
    return TransactionContext(route="/SiteDirectory")


class ThingTransaction:
    """One staged change set rooted at a single clone."""

    def __init__(self, context: TransactionContext, clone: Thing):
        self.context = context
        self.clone = clone
        self.added_things: List[Thing] = []
        self.updated_things: Dict[str, Thing] = {}
        self.deleted_things: List[Thing] = []

    @property
    def kind(self) -> ChangeKind:
        if self.added_things:
            return ChangeKind.CREATE
        if self.deleted_things:
            return ChangeKind.DELETE
        return ChangeKind.UPDATE

    @property
    def has_changes(self) -> bool:
        return bool(self.added_things or self.updated_things or self.deleted_things)

    def create(self, thing: Thing, container: Thing) -> None:
        """Attaches a new ``thing`` to the clone ``container``."""
        thing.container = container.iid
        getattr(container, thing.container_field).append(thing)
        self.added_things.append(thing)
        self.updated_things[container.iid] = container

    def create_or_update(self, thing: Thing) -> None:
        self.updated_things[thing.iid] = thing

    def delete(self, thing: Thing, container: Thing) -> None:
        children = getattr(container, thing.container_field)
        children[:] = [child for child in children if child.iid != thing.iid]
        self.deleted_things.append(thing)
        self.updated_things[container.iid] = container

    def __repr__(self) -> str:
        return (
            f"ThingTransaction({self.kind.value}, root={self.clone!r}, "
            f"added={len(self.added_things)}, updated={len(self.updated_things)}, "
            f"deleted={len(self.deleted_things)})"
        )


class TransactionStager:
    """
    Appends clone-and-modify transactions to a shared, order-preserving list.
    Staging is pure object construction and cannot fail.
    """

    def __init__(self, transactions: List[ThingTransaction], cache: ThingCache):
        self.transactions = transactions
        self.cache = cache

    def prepare(self, thing: T) -> Tuple[ThingTransaction, T]:
        """Checks out ``thing`` and opens a transaction on the clone without submitting it."""
        clone = checkout(thing)
        return ThingTransaction(resolve_context(clone, self.cache), clone), clone

    def submit(self, transaction: ThingTransaction) -> ThingTransaction:
        self.transactions.append(transaction)
        logger.debug("Staged %r", transaction)
        return transaction

    def open(self, thing: T) -> Tuple[ThingTransaction, T]:
        transaction, clone = self.prepare(thing)
        self.submit(transaction)
        return transaction, clone

    def update(self, thing: T, **changes) -> T:
        transaction, clone = self.open(thing)
        for field_name, value in changes.items():
            setattr(clone, field_name, value)
        transaction.create_or_update(clone)
        return clone

    def create(self, thing: Thing, container: Thing) -> ThingTransaction:
        transaction, container_clone = self.open(container)
        transaction.create(thing, container_clone)
        return transaction

    def delete(self, thing: Thing, container: Thing) -> ThingTransaction:
        transaction, container_clone = self.open(container)
        transaction.delete(thing, container_clone)
        return transaction
