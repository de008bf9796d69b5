import logging
from typing import List, Optional

from cdp_batch_editor.model import (
    DomainOfExpertise,
    ElementDefinition,
    Parameter,
    ParameterGroup,
    ParameterType,
)
from cdp_batch_editor.session.transaction import ThingTransaction, checkout

from .base import BatchCommand

logger = logging.getLogger(__name__)


class ParameterCommand(BatchCommand):
    def add(self) -> None:
        if not self.has_selected_parameters("add-parameters"):
            return

        parameter_types = self._resolve_parameter_types("add-parameters")
        if not parameter_types:
            return

        owner = None
        if self.arguments.domain_of_expertise:
            owner = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)
            if owner is None:
                logger.warning(
                    "Action add-parameters: domain-of-expertise with short name \"%s\" not found.",
                    self.arguments.domain_of_expertise,
                )
                return

        for element_definition in self.filtered_elements():
            self._add_to_element(element_definition, parameter_types, owner)

    def remove(self) -> None:
        if not self.has_selected_parameters("remove-parameters"):
            return

        parameter_types = self._resolve_parameter_types("remove-parameters")
        if not parameter_types:
            return

        owner = None
        if self.arguments.domain_of_expertise:
            owner = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)
            if owner is None:
                logger.warning(
                    "Action remove-parameters: domain-of-expertise with short name \"%s\" not found.",
                    self.arguments.domain_of_expertise,
                )
                return

        for element_definition in self.filtered_elements():
            for parameter_type in parameter_types:
                parameter = self._find_parameter(element_definition, parameter_type)
                if parameter is None or (owner is not None and parameter.owner != owner.iid):
                    continue

                self.stager.delete(parameter, element_definition)
                logger.info("In %s removed Parameter %s", element_definition.short_name, parameter_type.short_name)

    def _resolve_parameter_types(self, action: str) -> List[ParameterType]:
        libraries = self.session_service.reference_data_libraries()

        parameter_types = []
        for short_name in self.arguments.selected_parameters:
            parameter_type = self.site_directory.parameter_type_by_short_name(short_name, libraries)
            if parameter_type is None:
                logger.warning("Action %s: parameter type with short name \"%s\" not found.", action, short_name)
            else:
                parameter_types.append(parameter_type)
        return parameter_types

    def _add_to_element(
        self,
        element_definition: ElementDefinition,
        parameter_types: List[ParameterType],
        owner: Optional[DomainOfExpertise],
    ) -> None:
        transaction, element_clone = self.stager.prepare(element_definition)
        group_name = self.arguments.parameter_group

        for parameter_type in parameter_types:
            group = self._get_or_create_group(element_clone, group_name, transaction) if group_name else None
            parameter = self._find_parameter(element_definition, parameter_type)

            if parameter is None:
                parameter = Parameter(
                    owner=owner.iid if owner is not None else element_definition.owner,
                    parameter_type=parameter_type.iid,
                    scale=parameter_type.default_scale if parameter_type.is_quantity_kind else None,
                    group=group.iid if group is not None else None,
                )
                transaction.create(parameter, element_clone)
                logger.info("In %s added Parameter %s", element_definition.short_name, parameter_type.short_name)
            elif group is not None and parameter.group != group.iid:
                parameter_clone = checkout(parameter)
                parameter_clone.group = group.iid
                transaction.create_or_update(parameter_clone)
                logger.info("Moved parameter %s to group %s", parameter_type.short_name, group.name)

        if transaction.has_changes:
            self.stager.submit(transaction)

    def _get_or_create_group(
        self,
        element_clone: ElementDefinition,
        group_name: str,
        transaction: ThingTransaction,
    ) -> ParameterGroup:
        group = next((g for g in element_clone.parameter_groups if g.name == group_name), None)
        if group is None:
            group = ParameterGroup(name=group_name)
            transaction.create(group, element_clone)
            logger.info("In %s created parameter group %s", element_clone.short_name, group_name)
        return group

    @staticmethod
    def _find_parameter(element_definition: ElementDefinition, parameter_type: ParameterType) -> Optional[Parameter]:
        return next((p for p in element_definition.parameters if p.parameter_type == parameter_type.iid), None)
