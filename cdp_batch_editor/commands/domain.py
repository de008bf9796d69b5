import logging
from typing import Dict, Optional

from cdp_batch_editor.model import DomainOfExpertise, OwnedThing

from .base import BatchCommand

logger = logging.getLogger(__name__)

GENERIC_EQUIPMENT_PREFIX = "Generic Equipment"

# Parameter type short name -> short name of the domain prescribed to own it
GENERIC_EQUIPMENT_OWNERSHIP = {
    "P_mean": "PWR",
    "P_duty_cyc": "SYS",
    "loc": "CONF",
}


class DomainCommand(BatchCommand):
    """Ownership changes: whole domain moves, selected parameters and generic equipment."""

    def change_domain(self) -> None:
        from_short_name = self.arguments.domain_of_expertise
        to_short_name = self.arguments.to_domain_of_expertise

        if from_short_name == to_short_name:
            logger.warning("The from and to domains are the same. No changes performed.")
            return

        from_domain = self.site_directory.domain_by_short_name(from_short_name)
        if from_domain is None:
            logger.warning("The from-domain %s cannot be found.", from_short_name)
            return

        to_domain = self.site_directory.domain_by_short_name(to_short_name)
        if to_domain is None:
            logger.warning("The to-domain %s cannot be found.", to_short_name)
            return

        for element_definition in self.filtered_elements():
            self._change_owner_if(element_definition, from_domain, to_domain)

            for parameter in self.by_parameter_type(element_definition.parameters):
                if not self.filter_service.is_parameter_specified_or_any(parameter):
                    continue
                self._change_owner_if(parameter, from_domain, to_domain)
                for subscription in parameter.subscriptions:
                    self._change_owner_if(subscription, from_domain, to_domain)

            for element_usage in sorted(element_definition.contained_elements, key=lambda u: u.short_name):
                self._change_owner_if(element_usage, from_domain, to_domain)

                for parameter_override in self.by_parameter_type(element_usage.parameter_overrides):
                    self._change_owner_if(parameter_override, from_domain, to_domain)
                    for subscription in parameter_override.subscriptions:
                        self._change_owner_if(subscription, from_domain, to_domain)

    def change_parameter_ownership(self) -> None:
        new_owner = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)

        if new_owner is None:
            logger.warning("Cannot find domain of expertise for %s", self.arguments.domain_of_expertise)
            return

        if not self.has_selected_parameters("change-parameter-ownership"):
            return

        for parameter in self.iter_selected_parameters():
            if parameter.owner != new_owner.iid:
                self._change_owner(parameter, new_owner)

    def set_generic_equipment_ownership(self) -> None:
        prescribed_ownership: Dict[str, Optional[DomainOfExpertise]] = {}
        for parameter_short_name, domain_short_name in GENERIC_EQUIPMENT_OWNERSHIP.items():
            domain = self.site_directory.domain_by_short_name(domain_short_name)
            if domain is None:
                logger.warning(
                    "Domain %s prescribed for parameter %s cannot be found",
                    domain_short_name,
                    parameter_short_name,
                )
            prescribed_ownership[parameter_short_name] = domain

        for element_definition in self.filtered_elements():
            if not element_definition.name.startswith(GENERIC_EQUIPMENT_PREFIX):
                continue

            element_owner = self.cache.get_typed(element_definition.owner, DomainOfExpertise)

            for parameter in self.by_parameter_type(element_definition.parameters):
                parameter_type_short_name = self.cache.short_name(parameter.parameter_type)

                if parameter_type_short_name in prescribed_ownership:
                    new_owner = prescribed_ownership[parameter_type_short_name]
                elif parameter.owner != element_definition.owner:
                    new_owner = element_owner
                else:
                    new_owner = None

                if new_owner is not None and parameter.owner != new_owner.iid:
                    self._change_owner(parameter, new_owner)

    def _change_owner_if(self, thing: OwnedThing, from_domain: DomainOfExpertise, to_domain: DomainOfExpertise) -> None:
        if thing.owner == from_domain.iid:
            self._change_owner(thing, to_domain)

    def _change_owner(self, thing: OwnedThing, new_owner: DomainOfExpertise) -> None:
        old_owner = self.cache.short_name(thing.owner)
        self.stager.update(thing, owner=new_owner.iid)
        logger.info("Changed owner of %s from %s to %s", self.name_of(thing), old_owner, new_owner.short_name)
