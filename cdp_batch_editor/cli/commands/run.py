# cdp_batch_editor/cli/commands/run.py

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from cdp_batch_editor import __version__
from cdp_batch_editor.arguments import CommandArguments, CommandEnumeration
from cdp_batch_editor.commands import UnsupportedActionError
from cdp_batch_editor.config import configure_logging
from cdp_batch_editor.container import build_app
from cdp_batch_editor.session import SnapshotError

logger = logging.getLogger(__name__)

BANNER = "CDP4 Batch Editor {version}"


def run(
    source: Path = typer.Option(..., "--source", "-s", help="JSON snapshot of the data store"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Short name of the engineering model"),
    iteration: Optional[int] = typer.Option(None, "--iteration", "-i", help="Iteration number (latest by default)"),
    action: CommandEnumeration = typer.Option(CommandEnumeration.UNSPECIFIED, "--action", help="Action to run, see 'actions'"),
    parameters: str = typer.Option("", "--parameters", help="Comma separated parameter type short names"),
    categories: str = typer.Option("", "--categories", help="Comma separated category short names"),
    element_definition: Optional[str] = typer.Option(None, "--element-definition", help="Top of the element definition subtree"),
    included_owners: str = typer.Option("", "--included-owners", help="Comma separated owner short names to include"),
    excluded_owners: str = typer.Option("", "--excluded-owners", help="Comma separated owner short names to exclude"),
    domain: Optional[str] = typer.Option(None, "--domain", help="Domain of expertise short name"),
    to_domain: Optional[str] = typer.Option(None, "--to-domain", help="Target domain of change-domain"),
    state: Optional[str] = typer.Option(None, "--state", help="Actual finite state list short name"),
    parameter_switch: Optional[str] = typer.Option(None, "--parameter-switch", help="COMPUTED | MANUAL | REFERENCE"),
    parameter_group: Optional[str] = typer.Option(None, "--parameter-group", help="Parameter group of added parameters"),
    scale: Optional[str] = typer.Option(None, "--scale", help="Measurement scale short name"),
    report: bool = typer.Option(False, "--report", help="Write the parameters CSV report"),
    report_dir: Path = typer.Option(Path("."), "--report-dir", help="Directory of the CSV report"),
    dry: bool = typer.Option(False, "--dry", help="Stage the changes without saving them"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Runs one batch action on an engineering model iteration.
    """
    configure_logging(verbose)
    typer.echo(BANNER.format(version=__version__))

    try:
        arguments = CommandArguments(
            source=source,
            engineering_model=model,
            iteration=iteration,
            command=action,
            selected_parameters=parameters,
            filtered_categories=categories,
            element_definition=element_definition,
            included_owners=included_owners,
            excluded_owners=excluded_owners,
            domain_of_expertise=domain,
            to_domain_of_expertise=to_domain,
            state_list_name=state,
            parameter_switch_kind=parameter_switch,
            parameter_group=parameter_group,
            scale=scale,
            report=report,
            report_dir=report_dir,
            dry_run=dry,
        )
    except ValidationError as exc:
        typer.echo(f"Invalid arguments: {exc}", err=True)
        raise typer.Exit(code=2)

    try:
        app = build_app(arguments)
        try:
            app.run()
        finally:
            app.stop()
    except (SnapshotError, UnsupportedActionError) as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)
