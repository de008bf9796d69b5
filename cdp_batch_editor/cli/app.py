# cdp_batch_editor/cli/app.py

import typer
from cdp_batch_editor.cli.commands.run import run
from cdp_batch_editor.cli.commands.actions import actions

app = typer.Typer(help="CDP4 batch editor - bulk changes on an engineering model iteration")

app.command()(run)
app.command()(actions)

def main():
    app()

if __name__ == "__main__":
    main()
