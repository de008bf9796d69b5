import logging
from typing import List

from cdp_batch_editor.model import UNSET, ParameterSwitchKind, ParameterValueSet

from .base import BatchCommand

logger = logging.getLogger(__name__)


def movable_components(value_set: ParameterValueSet, scalar: bool) -> List[int]:
    """
    Component indices whose reference value can replace an unset manual value.
    Scalar value sets only consider their single component.
    """
    if value_set.value_switch != ParameterSwitchKind.REFERENCE:
        return []
    indices = range(min(1, len(value_set.manual))) if scalar else range(len(value_set.manual))
    return [
        i for i in indices
        if value_set.manual[i] == UNSET and i < len(value_set.reference) and value_set.reference[i] != UNSET
    ]


class ValueSetCommand(BatchCommand):
    def move_reference_values_to_manual_values(self) -> None:
        parameters = [
            p for e in self.filtered_elements() for p in e.parameters
            if self.filter_service.is_parameter_specified_or_any(p)
        ]

        for parameter in self.by_parameter_type(parameters):
            parameter_type = self.cache.parameter_type_of(parameter)
            if parameter_type is None:
                continue

            for value_set in parameter.value_sets:
                indices = movable_components(value_set, parameter_type.is_scalar)
                if not indices:
                    continue

                transaction, clone = self.stager.open(value_set)
                for index in indices:
                    clone.manual[index] = clone.reference[index]
                    clone.reference[index] = UNSET
                clone.value_switch = ParameterSwitchKind.MANUAL
                transaction.create_or_update(clone)

                moved = "|".join(value_set.reference[i] for i in indices)
                logger.info(
                    "Moved %s = %s ref value to manual value and changed switch to MANUAL",
                    self.name_of(parameter),
                    moved,
                )
