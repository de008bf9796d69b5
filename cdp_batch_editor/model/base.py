from typing import ClassVar, Iterator, Optional, Tuple
import uuid

from pydantic import BaseModel, ConfigDict, Field

# The value of an unset slot in a value set.
UNSET = "-"


def new_iid() -> str:
    return str(uuid.uuid4())


class Thing(BaseModel):
    """
    Base of every item of the engineering data model.

    Cross references between things are held as identities (iid strings);
    containment is held as nested lists named in ``contained_fields``.
    Two things are equal when they share an iid, so a clone compares equal
    to the live instance it was taken from.
    """
    iid: str = Field(default_factory=new_iid)
    # iid of the containing thing; stamped when the thing is registered in a cache
    container: Optional[str] = Field(default=None, exclude=True)

    model_config = ConfigDict(extra="ignore")

    # Names of the list fields holding contained things
    contained_fields: ClassVar[Tuple[str, ...]] = ()
    # Name of the list on the container that holds things of this class
    container_field: ClassVar[Optional[str]] = None

    def contained(self) -> Iterator["Thing"]:
        for field_name in self.contained_fields:
            yield from getattr(self, field_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Thing):
            return NotImplemented
        return self.iid == other.iid

    def __hash__(self) -> int:
        return hash(self.iid)

    def __repr__(self) -> str:
        label = getattr(self, "short_name", None) or getattr(self, "name", None) or ""
        return f"{type(self).__name__}({label!r}, iid={self.iid})"


class ShortNamedThing(Thing):
    short_name: str
    name: str = ""


class OwnedThing(Thing):
    # iid of the owning DomainOfExpertise
    owner: str
