from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from pydantic import Field

from .base import UNSET, OwnedThing, ShortNamedThing, Thing


class ParameterSwitchKind(str, Enum):
    COMPUTED = "COMPUTED"
    MANUAL = "MANUAL"
    REFERENCE = "REFERENCE"


class ParameterValueSet(Thing):
    """
    Values of one parameter instance. The four arrays are parallel, one entry
    per component, and are always fully populated (UNSET marks an empty slot).
    """
    manual: List[str] = Field(default_factory=lambda: [UNSET])
    computed: List[str] = Field(default_factory=lambda: [UNSET])
    reference: List[str] = Field(default_factory=lambda: [UNSET])
    published: List[str] = Field(default_factory=lambda: [UNSET])
    formula: List[str] = Field(default_factory=list)
    value_switch: ParameterSwitchKind = ParameterSwitchKind.MANUAL
    actual_option: Optional[str] = None
    actual_state: Optional[str] = None

    container_field: ClassVar[Optional[str]] = "value_sets"

    @property
    def actual_value(self) -> List[str]:
        if self.value_switch == ParameterSwitchKind.COMPUTED:
            return self.computed
        if self.value_switch == ParameterSwitchKind.REFERENCE:
            return self.reference
        return self.manual

    @classmethod
    def unset(cls, number_of_components: int = 1, **kwargs) -> "ParameterValueSet":
        size = max(1, number_of_components)
        return cls(
            manual=[UNSET] * size,
            computed=[UNSET] * size,
            reference=[UNSET] * size,
            published=[UNSET] * size,
            **kwargs,
        )


class ParameterSubscriptionValueSet(ParameterValueSet):
    # iid of the value set of the subscribed parameter or override
    subscribed_value_set: Optional[str] = None


class ParameterSubscription(OwnedThing):
    value_sets: List[ParameterSubscriptionValueSet] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("value_sets",)
    container_field: ClassVar[Optional[str]] = "subscriptions"


class ParameterGroup(Thing):
    name: str
    containing_group: Optional[str] = None

    container_field: ClassVar[Optional[str]] = "parameter_groups"


class ParameterBase(OwnedThing):
    parameter_type: str
    scale: Optional[str] = None
    value_sets: List[ParameterValueSet] = Field(default_factory=list)
    subscriptions: List[ParameterSubscription] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("value_sets", "subscriptions")


class Parameter(ParameterBase):
    is_option_dependent: bool = False
    # iid of an ActualFiniteStateList
    state_dependence: Optional[str] = None
    group: Optional[str] = None

    container_field: ClassVar[Optional[str]] = "parameters"


class ParameterOverride(ParameterBase):
    # iid of the overridden Parameter
    parameter: str

    container_field: ClassVar[Optional[str]] = "parameter_overrides"


class ElementUsage(ShortNamedThing, OwnedThing):
    # iid of the referenced ElementDefinition
    element_definition: str
    categories: List[str] = Field(default_factory=list)
    parameter_overrides: List[ParameterOverride] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("parameter_overrides",)
    container_field: ClassVar[Optional[str]] = "contained_elements"


class ElementDefinition(ShortNamedThing, OwnedThing):
    categories: List[str] = Field(default_factory=list)
    parameters: List[Parameter] = Field(default_factory=list)
    parameter_groups: List[ParameterGroup] = Field(default_factory=list)
    contained_elements: List[ElementUsage] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = (
        "parameter_groups",
        "parameters",
        "contained_elements",
    )
    container_field: ClassVar[Optional[str]] = "elements"


class ActualFiniteStateList(ShortNamedThing, OwnedThing):
    container_field: ClassVar[Optional[str]] = "actual_finite_state_lists"


class Option(ShortNamedThing):
    container_field: ClassVar[Optional[str]] = "options"


class Iteration(Thing):
    iteration_number: int = 1
    elements: List[ElementDefinition] = Field(default_factory=list)
    actual_finite_state_lists: List[ActualFiniteStateList] = Field(default_factory=list)
    options: List[Option] = Field(default_factory=list)
    # iids of the ReferenceDataLibraries this iteration draws parameter types from
    required_rdls: List[str] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = (
        "options",
        "actual_finite_state_lists",
        "elements",
    )
    container_field: ClassVar[Optional[str]] = "iterations"

    def element_by_short_name(self, short_name: str) -> Optional[ElementDefinition]:
        return next((e for e in self.elements if e.short_name == short_name), None)

    def state_list_by_short_name(self, short_name: Optional[str]) -> Optional[ActualFiniteStateList]:
        if not short_name:
            return None
        return next((s for s in self.actual_finite_state_lists if s.short_name == short_name), None)


class EngineeringModel(ShortNamedThing):
    iterations: List[Iteration] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("iterations",)
