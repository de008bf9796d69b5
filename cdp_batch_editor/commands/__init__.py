from .base import BatchCommand
from .dispatcher import CommandDispatcher, UnsupportedActionError
from .domain import DomainCommand
from .option import OptionCommand
from .parameter import ParameterCommand
from .report import ReportGenerator
from .scale import ScaleCommand
from .state import StateCommand
from .subscription import SubscriptionCommand
from .value_set import ValueSetCommand

__all__ = [
    "BatchCommand",
    "CommandDispatcher",
    "UnsupportedActionError",
    "DomainCommand",
    "OptionCommand",
    "ParameterCommand",
    "ReportGenerator",
    "ScaleCommand",
    "StateCommand",
    "SubscriptionCommand",
    "ValueSetCommand",
]
