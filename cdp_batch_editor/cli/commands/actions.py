# cdp_batch_editor/cli/commands/actions.py

import typer
from cdp_batch_editor.arguments import ACTION_DESCRIPTIONS, CommandEnumeration


def actions():
    """
    Lists the actions accepted by --action.
    """
    width = max(len(action.value) for action in CommandEnumeration)
    for action in CommandEnumeration:
        typer.echo(f"{action.value.ljust(width)}  {ACTION_DESCRIPTIONS[action]}")
