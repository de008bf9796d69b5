from .base import UNSET, OwnedThing, ShortNamedThing, Thing, new_iid
from .site_directory import (
    Category,
    DomainOfExpertise,
    MeasurementScale,
    ParameterType,
    ParameterTypeKind,
    ReferenceDataLibrary,
    SiteDirectory,
)
from .engineering_model import (
    ActualFiniteStateList,
    ElementDefinition,
    ElementUsage,
    EngineeringModel,
    Iteration,
    Option,
    Parameter,
    ParameterBase,
    ParameterGroup,
    ParameterOverride,
    ParameterSubscription,
    ParameterSubscriptionValueSet,
    ParameterSwitchKind,
    ParameterValueSet,
)
from .snapshot import ModelSnapshot

__all__ = [
    "UNSET",
    "Thing",
    "ShortNamedThing",
    "OwnedThing",
    "new_iid",
    "Category",
    "DomainOfExpertise",
    "MeasurementScale",
    "ParameterType",
    "ParameterTypeKind",
    "ReferenceDataLibrary",
    "SiteDirectory",
    "ActualFiniteStateList",
    "ElementDefinition",
    "ElementUsage",
    "EngineeringModel",
    "Iteration",
    "Option",
    "Parameter",
    "ParameterBase",
    "ParameterGroup",
    "ParameterOverride",
    "ParameterSubscription",
    "ParameterSubscriptionValueSet",
    "ParameterSwitchKind",
    "ParameterValueSet",
    "ModelSnapshot",
]
