from typing import Optional

from cdp_batch_editor.app import BatchEditorApp
from cdp_batch_editor.arguments import CommandArguments
from cdp_batch_editor.commands import (
    CommandDispatcher,
    DomainCommand,
    OptionCommand,
    ParameterCommand,
    ReportGenerator,
    ScaleCommand,
    StateCommand,
    SubscriptionCommand,
    ValueSetCommand,
)
from cdp_batch_editor.filters import FilterService
from cdp_batch_editor.session import JsonFileSession, Session, SnapshotError
from cdp_batch_editor.session.service import SessionService


def build_app(arguments: CommandArguments, session: Optional[Session] = None) -> BatchEditorApp:
    """
    Wires the services and commands of one run. Without an explicit session the
    JSON snapshot file named by ``arguments.source`` is used.
    """
    if session is None:
        if arguments.source is None:
            raise SnapshotError("No data store given: use --source")
        session = JsonFileSession(arguments.source)

    filter_service = FilterService(arguments, session.cache)
    session_service = SessionService(arguments, filter_service, session)
    command_args = (arguments, session_service, filter_service)

    dispatcher = CommandDispatcher(
        arguments,
        parameter_command=ParameterCommand(*command_args),
        subscription_command=SubscriptionCommand(*command_args),
        option_command=OptionCommand(*command_args),
        scale_command=ScaleCommand(*command_args),
        state_command=StateCommand(*command_args),
        domain_command=DomainCommand(*command_args),
        value_set_command=ValueSetCommand(*command_args),
        report_generator=ReportGenerator(session_service),
    )
    return BatchEditorApp(session_service, dispatcher)
