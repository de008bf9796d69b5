from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence

from pydantic import ValidationError

from cdp_batch_editor.model import (
    EngineeringModel,
    ModelSnapshot,
    Parameter,
    ParameterBase,
    ParameterSubscription,
    ParameterSubscriptionValueSet,
    ParameterSwitchKind,
    ParameterValueSet,
    Thing,
)

from .cache import ThingCache
from .transaction import ThingTransaction, checkout

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    pass


class Session(Protocol):
    """Connection to a data store holding engineering models."""
    cache: ThingCache

    def open(self) -> ModelSnapshot:
        ...

    def write(self, transactions: Sequence[ThingTransaction]) -> None:
        ...

    def close(self) -> None:
        ...


class SnapshotSession:
    """
    Session over an in-memory ModelSnapshot.

    ``write`` replays the transactions in submission order onto the live
    things: updates copy the clone's own fields, creates attach a copy of the
    new thing to its live container, deletes detach it.
    """

    def __init__(self, snapshot: Optional[ModelSnapshot] = None, cache: Optional[ThingCache] = None):
        self.snapshot = snapshot
        self.cache = cache if cache is not None else ThingCache()
        self.is_open = False

    def open(self) -> ModelSnapshot:
        if self.snapshot is None:
            self.snapshot = self.load()
        self.cache.clear()
        self.cache.register(self.snapshot.site_directory)
        for model in self.snapshot.engineering_models:
            self.cache.register(model)
        self.is_open = True
        return self.snapshot

    def load(self) -> ModelSnapshot:
        raise SnapshotError("No model snapshot available")

    def write(self, transactions: Sequence[ThingTransaction]) -> None:
        if not self.is_open:
            raise SnapshotError("The session must be opened before writing")
        for transaction in transactions:
            self._apply(transaction)
        self.persist()

    def persist(self) -> None:
        pass

    def close(self) -> None:
        self.is_open = False

    def _apply(self, transaction: ThingTransaction) -> None:
        for thing in transaction.deleted_things:
            live = self.cache.get(thing.iid)
            if live is None:
                logger.warning("Cannot delete %r: not found in the data store", thing)
                continue
            container = self.cache.require(live.container)
            children = getattr(container, live.container_field)
            children[:] = [child for child in children if child.iid != live.iid]
            self.cache.forget(live)

        added = set()
        for thing in transaction.added_things:
            container = self.cache.get(thing.container)
            if container is None:
                logger.warning("Cannot create %r: container %s not found", thing, thing.container)
                continue
            new_thing = checkout(thing)
            self._initialize_value_sets(new_thing, container)
            getattr(container, new_thing.container_field).append(new_thing)
            self.cache.register(new_thing, container)
            added.add(thing.iid)

        for thing in transaction.updated_things.values():
            if thing.iid in added:
                continue
            live = self.cache.get(thing.iid)
            if live is None:
                logger.warning("Cannot update %r: not found in the data store", thing)
                continue
            _copy_own_fields(thing, live)

    def _initialize_value_sets(self, thing: Thing, container: Thing) -> None:
        # Value sets of new parameters and subscriptions are generated by the data store
        if isinstance(thing, Parameter) and not thing.value_sets:
            parameter_type = self.cache.parameter_type_of(thing)
            size = parameter_type.number_of_components if parameter_type is not None else 1
            thing.value_sets.append(ParameterValueSet.unset(size))
        elif isinstance(thing, ParameterSubscription) and not thing.value_sets and isinstance(container, ParameterBase):
            for subscribed in container.value_sets:
                thing.value_sets.append(
                    ParameterSubscriptionValueSet.unset(
                        len(subscribed.manual),
                        subscribed_value_set=subscribed.iid,
                        value_switch=ParameterSwitchKind.COMPUTED,
                        actual_option=subscribed.actual_option,
                        actual_state=subscribed.actual_state,
                    )
                )


def _copy_own_fields(source: Thing, target: Thing) -> None:
    skipped = set(target.contained_fields) | {"iid", "container"}
    for field_name in type(target).model_fields:
        if field_name in skipped:
            continue
        setattr(target, field_name, copy.deepcopy(getattr(source, field_name)))


class JsonFileSession(SnapshotSession):
    """Session backed by a JSON snapshot file; committed changes are written back to the file."""

    def __init__(self, path: Path | str, cache: Optional[ThingCache] = None):
        super().__init__(None, cache)
        self.path = Path(path)

    def load(self) -> ModelSnapshot:
        if not self.path.exists():
            raise SnapshotError(f"Data store file not found: {self.path}")
        try:
            snapshot = ModelSnapshot.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise SnapshotError(f"Invalid data store file {self.path}: {exc}") from exc
        logger.info(
            "Loaded %d engineering model(s) from %s",
            len(snapshot.engineering_models),
            self.path,
        )
        return snapshot

    def persist(self) -> None:
        self.path.write_text(self.snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Data store %s updated", self.path)


def iteration_of(model: EngineeringModel, iteration_number: Optional[int]):
    if not model.iterations:
        return None
    if iteration_number is None:
        return model.iterations[-1]
    return next((i for i in model.iterations if i.iteration_number == iteration_number), None)
