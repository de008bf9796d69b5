import logging

from cdp_batch_editor.model import ParameterBase, ParameterSubscription

from .base import BatchCommand

logger = logging.getLogger(__name__)


class SubscriptionCommand(BatchCommand):
    def subscribe(self) -> None:
        subscriber = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)

        if subscriber is None:
            logger.warning(
                "Unknown subscriber domain of expertise: \"%s\". Subscribe parameters skipped.",
                self.arguments.domain_of_expertise,
            )
            return

        if not self.has_selected_parameters("subscribe"):
            return

        for element_definition in self.filtered_elements():
            for parameter in self.by_parameter_type(element_definition.parameters):
                if self._can_subscribe(parameter, subscriber.iid):
                    self._take_subscription(parameter, subscriber.iid, "Parameter")

            for element_usage in sorted(element_definition.contained_elements, key=lambda u: u.short_name):
                for parameter_override in self.by_parameter_type(element_usage.parameter_overrides):
                    if self._can_subscribe(parameter_override, subscriber.iid):
                        self._take_subscription(parameter_override, subscriber.iid, "Parameter Override")

    def set_parameter_subscriptions_switch(self) -> None:
        subscriber = self.site_directory.domain_by_short_name(self.arguments.domain_of_expertise)

        if subscriber is None:
            logger.warning(
                "Unknown subscriber domain of expertise: \"%s\". Set subscription switch skipped.",
                self.arguments.domain_of_expertise,
            )
            return

        switch = self.arguments.parameter_switch_kind
        if switch is None:
            logger.warning(
                "Parameter switch kind not provided: use \"--parameter-switch\" with one of the following values: "
                "\"COMPUTED\" | \"MANUAL\" | \"REFERENCE\". Set subscription switch skipped."
            )
            return

        change_count = 0

        for element_definition in self.filtered_elements():
            parameters = [
                p for p in element_definition.parameters
                if self.filter_service.is_parameter_specified_or_any(p)
            ]
            for parameter in self.by_parameter_type(parameters):
                change_count += self._update_switches(parameter, subscriber.iid, switch)

            for element_usage in sorted(element_definition.contained_elements, key=lambda u: u.short_name):
                for parameter_override in self.by_parameter_type(element_usage.parameter_overrides):
                    change_count += self._update_switches(parameter_override, subscriber.iid, switch)

        logger.info(
            "Set switch to %s on %d Parameter or Parameter Override Subscriptions for %s",
            switch.value,
            change_count,
            subscriber.short_name,
        )

    def _can_subscribe(self, parameter: ParameterBase, subscriber_iid: str) -> bool:
        return (
            self.is_selected(parameter)
            and parameter.owner != subscriber_iid
            and all(s.owner != subscriber_iid for s in parameter.subscriptions)
        )

    def _take_subscription(self, parameter: ParameterBase, subscriber_iid: str, label: str) -> None:
        subscription = ParameterSubscription(owner=subscriber_iid)
        self.stager.create(subscription, parameter)
        logger.info("%s Subscription taken on %s", label, self.name_of(subscription))

    def _update_switches(self, parameter: ParameterBase, subscriber_iid: str, switch) -> int:
        count = 0
        for subscription in parameter.subscriptions:
            if subscription.owner != subscriber_iid:
                continue
            for value_set in subscription.value_sets:
                self.stager.update(value_set, value_switch=switch)
                count += 1
        return count
