"""
mnlgconv - Encoder/decoder for Korg monologue program dumps.

A CLI tool for inspecting, validating and converting monologue programs.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.convert import convert
from cli.commands.dump import dump
from cli.commands.info import info
from cli.commands.init import init
from cli.commands.validate import validate
from mnlgconv import __version__

console = Console()

# Main app
app = typer.Typer(
    name="mnlgconv",
    help="Decode, encode and inspect Korg monologue program dumps.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="validate")(validate)
app.command(name="dump")(dump)
app.command(name="convert")(convert)
app.command(name="init")(init)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]mnlgconv[/bold] version {__version__}")
    console.print("[dim]Encoder/decoder for Korg monologue program dumps[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    mnlgconv - Decode, encode and inspect Korg monologue programs.

    Works on single-program SysEx dumps ([cyan]520 bytes[/cyan], .syx).

    [bold]Quick Start:[/bold]

        mnlgconv info program.syx           # Decoded parameters
        mnlgconv info program.syx --steps   # Including step events

    [bold]Analysis Commands:[/bold]

        mnlgconv validate program.syx       # Check frame integrity
        mnlgconv dump program.syx           # Annotated body hex dump

    [bold]Utility Commands:[/bold]

        mnlgconv convert program.syx        # .syx -> .json
        mnlgconv convert program.json       # .json -> .syx
        mnlgconv init blank.syx             # Initialized program

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
