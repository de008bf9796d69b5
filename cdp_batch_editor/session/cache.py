from typing import Dict, Iterator, Optional, Type, TypeVar

from cdp_batch_editor.model import (
    ElementDefinition,
    ElementUsage,
    Parameter,
    ParameterOverride,
    ParameterSubscription,
    ParameterType,
    Thing,
)

T = TypeVar("T", bound=Thing)


class ThingCache:
    """
    Identity-keyed lookup of the live things read from the data store.

    The cache is shared read-only by every command of a run. Commands never
    modify the things it holds; they stage changes on clones instead.
    """
    def __init__(self) -> None:
        self._things: Dict[str, Thing] = {}

    def register(self, thing: Thing, container: Optional[Thing] = None) -> None:
        if container is not None:
            thing.container = container.iid
        self._things[thing.iid] = thing
        for child in thing.contained():
            self.register(child, thing)

    def forget(self, thing: Thing) -> None:
        for child in thing.contained():
            self.forget(child)
        self._things.pop(thing.iid, None)

    def clear(self) -> None:
        self._things.clear()

    def get(self, iid: Optional[str]) -> Optional[Thing]:
        if iid is None:
            return None
        return self._things.get(iid)

    def require(self, iid: str) -> Thing:
        return self._things[iid]

    def get_typed(self, iid: Optional[str], kind: Type[T]) -> Optional[T]:
        thing = self.get(iid)
        return thing if isinstance(thing, kind) else None

    def __contains__(self, iid: object) -> bool:
        return iid in self._things

    def __len__(self) -> int:
        return len(self._things)

    def __iter__(self) -> Iterator[Thing]:
        return iter(self._things.values())

    # --- naming helpers used when narrating changes ---

    def short_name(self, iid: Optional[str]) -> str:
        thing = self.get(iid)
        if thing is None:
            return ""
        return getattr(thing, "short_name", None) or getattr(thing, "name", "") or ""

    def parameter_type_of(self, parameter: Thing) -> Optional[ParameterType]:
        return self.get_typed(getattr(parameter, "parameter_type", None), ParameterType)

    def container_of(self, thing: Thing, kind: Type[T]) -> Optional[T]:
        current = self.get(thing.container)
        while current is not None and not isinstance(current, kind):
            current = self.get(current.container)
        return current

    def user_friendly_short_name(self, thing: Thing) -> str:
        if isinstance(thing, Parameter):
            element = self.container_of(thing, ElementDefinition)
            return f"{element.short_name if element else ''}.{self.short_name(thing.parameter_type)}"
        if isinstance(thing, ParameterOverride):
            usage = self.container_of(thing, ElementUsage)
            element = self.container_of(thing, ElementDefinition)
            prefix = f"{element.short_name}.{usage.short_name}" if element and usage else ""
            return f"{prefix}.{self.short_name(thing.parameter_type)}"
        if isinstance(thing, ParameterSubscription):
            subscribed = self.get(thing.container)
            base = self.user_friendly_short_name(subscribed) if subscribed is not None else ""
            return f"{base}:{self.short_name(thing.owner)}"
        return getattr(thing, "short_name", None) or getattr(thing, "name", None) or thing.iid
