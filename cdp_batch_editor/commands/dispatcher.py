import logging
from typing import Callable, Dict

from cdp_batch_editor.arguments import CommandArguments, CommandEnumeration

from .domain import DomainCommand
from .option import OptionCommand
from .parameter import ParameterCommand
from .report import ReportGenerator
from .scale import ScaleCommand
from .state import StateCommand
from .subscription import SubscriptionCommand
from .value_set import ValueSetCommand

logger = logging.getLogger(__name__)


class UnsupportedActionError(Exception):
    pass


class CommandDispatcher:
    """Runs the one batch command selected by --action, then the report when --report is set."""

    def __init__(
        self,
        arguments: CommandArguments,
        parameter_command: ParameterCommand,
        subscription_command: SubscriptionCommand,
        option_command: OptionCommand,
        scale_command: ScaleCommand,
        state_command: StateCommand,
        domain_command: DomainCommand,
        value_set_command: ValueSetCommand,
        report_generator: ReportGenerator,
    ):
        self.arguments = arguments
        self.report_generator = report_generator

        self.handlers: Dict[CommandEnumeration, Callable[[], None]] = {
            CommandEnumeration.UNSPECIFIED: lambda: None,
            CommandEnumeration.ADD_PARAMETERS: parameter_command.add,
            CommandEnumeration.REMOVE_PARAMETERS: parameter_command.remove,
            CommandEnumeration.MOVE_REFERENCE_VALUES_TO_MANUAL_VALUES: value_set_command.move_reference_values_to_manual_values,
            CommandEnumeration.APPLY_OPTION_DEPENDENCE: lambda: option_command.apply_or_remove_option_dependency(False),
            CommandEnumeration.APPLY_STATE_DEPENDENCE: lambda: state_command.apply_or_remove_state_dependency(False),
            CommandEnumeration.CHANGE_PARAMETER_OWNERSHIP: domain_command.change_parameter_ownership,
            CommandEnumeration.CHANGE_DOMAIN: domain_command.change_domain,
            CommandEnumeration.REMOVE_OPTION_DEPENDENCE: lambda: option_command.apply_or_remove_option_dependency(True),
            CommandEnumeration.REMOVE_STATE_DEPENDENCE: lambda: state_command.apply_or_remove_state_dependency(True),
            CommandEnumeration.SET_GENERIC_OWNERS: domain_command.set_generic_equipment_ownership,
            CommandEnumeration.SET_SCALE: scale_command.assign_measurement_scale,
            CommandEnumeration.STANDARDIZE_DIMENSIONS_IN_MILLIMETER: scale_command.standardize_dimensions_in_millimetre,
            CommandEnumeration.SET_SUBSCRIPTION_SWITCH: subscription_command.set_parameter_subscriptions_switch,
            CommandEnumeration.SUBSCRIBE: subscription_command.subscribe,
        }

        missing = [action.value for action in CommandEnumeration if action not in self.handlers]
        if missing:
            raise UnsupportedActionError(f"No handler for action(s): {', '.join(missing)}")

    def invoke(self) -> None:
        action = self.arguments.command
        handler = self.handlers.get(action) if isinstance(action, CommandEnumeration) else None

        if handler is None:
            raise UnsupportedActionError(f"Unsupported action: {action!r}")

        if action != CommandEnumeration.UNSPECIFIED:
            logger.info("Running action %s", action.value)
        handler()

        if self.arguments.report:
            self.report_generator.parameters_to_csv()
