from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Tuple

from pydantic import Field

from .base import ShortNamedThing, Thing


class DomainOfExpertise(ShortNamedThing):
    container_field: ClassVar[Optional[str]] = "domains"


class Category(ShortNamedThing):
    container_field: ClassVar[Optional[str]] = "categories"


class MeasurementScale(ShortNamedThing):
    container_field: ClassVar[Optional[str]] = "scales"


class ParameterTypeKind(str, Enum):
    QUANTITY_KIND = "QUANTITY_KIND"
    BOOLEAN = "BOOLEAN"
    TEXT = "TEXT"
    DATE = "DATE"
    ENUMERATION = "ENUMERATION"
    COMPOUND = "COMPOUND"


class ParameterType(ShortNamedThing):
    kind: ParameterTypeKind = ParameterTypeKind.TEXT
    # Scale iids a quantity kind accepts
    possible_scales: List[str] = Field(default_factory=list)
    default_scale: Optional[str] = None
    number_of_components: int = 1

    container_field: ClassVar[Optional[str]] = "parameter_types"

    @property
    def is_quantity_kind(self) -> bool:
        return self.kind == ParameterTypeKind.QUANTITY_KIND

    @property
    def is_scalar(self) -> bool:
        return self.kind != ParameterTypeKind.COMPOUND


class ReferenceDataLibrary(ShortNamedThing):
    scales: List[MeasurementScale] = Field(default_factory=list)
    parameter_types: List[ParameterType] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("scales", "parameter_types", "categories")
    container_field: ClassVar[Optional[str]] = "reference_data_libraries"


class SiteDirectory(Thing):
    domains: List[DomainOfExpertise] = Field(default_factory=list)
    reference_data_libraries: List[ReferenceDataLibrary] = Field(default_factory=list)

    contained_fields: ClassVar[Tuple[str, ...]] = ("domains", "reference_data_libraries")

    def domain_by_short_name(self, short_name: Optional[str]) -> Optional[DomainOfExpertise]:
        if not short_name:
            return None
        return next((d for d in self.domains if d.short_name == short_name), None)

    def all_scales(self) -> Iterator[MeasurementScale]:
        for rdl in self.reference_data_libraries:
            yield from rdl.scales

    def scale_by_short_name(self, short_name: Optional[str]) -> Optional[MeasurementScale]:
        if not short_name:
            return None
        return next((s for s in self.all_scales() if s.short_name == short_name), None)

    def parameter_type_by_short_name(
        self, short_name: str, libraries: Optional[List[ReferenceDataLibrary]] = None
    ) -> Optional[ParameterType]:
        """First parameter type with the short name in ``libraries``, every library by default."""
        for rdl in libraries if libraries is not None else self.reference_data_libraries:
            for parameter_type in rdl.parameter_types:
                if parameter_type.short_name == short_name:
                    return parameter_type
        return None
