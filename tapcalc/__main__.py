"""CLI for the tapcalc keypad calculator.

Usage:
    python -m tapcalc keys                     # Show keypad captions
    python -m tapcalc press 5 + 3 = =          # Press keys, show the display
    python -m tapcalc press "12*3=" --quiet    # Only print the final display
    python -m tapcalc format 1234567.891       # Render a number for the display
    python -m tapcalc repl                     # Interactive keypad session
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tapcalc.config import Settings, configure_logging
from tapcalc.display import KEY_ALIASES, Display, split_keys
from tapcalc.engine import CalculatorEngine
from tapcalc.formatter import DisplayParseError, parse_number
from tapcalc.models import DECIMAL_KEY, DIGIT_KEYS, ERROR_DISPLAY, Operation

app = typer.Typer(
    name="tapcalc",
    help="Four-function keypad calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("q", "quit", "exit")


def _key_kind(caption: str) -> str:
    if caption in DIGIT_KEYS or caption == DECIMAL_KEY:
        return "digit"
    op = Operation(caption)
    if op.is_binary:
        return "binary"
    if op == Operation.EQUALS:
        return "equals"
    if op == Operation.ALL_CLEAR:
        return "clear"
    return "unary"


def _parse_keys(args: list[str]) -> list[str]:
    keys: list[str] = []
    for arg in args:
        keys.extend(split_keys(arg))
    return keys


def _display_style(text: str) -> str:
    return "red" if text == ERROR_DISPLAY else "green"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logs"),
) -> None:
    """Four-function keypad calculator."""
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level, console)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad captions."""
    aliases: dict[str, list[str]] = {}
    for alias, caption in KEY_ALIASES.items():
        aliases.setdefault(caption, []).append(alias)

    table = Table(title="Keypad", show_header=True, header_style="bold")
    table.add_column("Key", style="green", min_width=5)
    table.add_column("Kind")
    table.add_column("Aliases", style="dim")

    for caption in (*DIGIT_KEYS, DECIMAL_KEY, *(op.value for op in Operation)):
        table.add_row(caption, _key_kind(caption), ", ".join(aliases.get(caption, [])))

    console.print()
    console.print(table)
    console.print()


@app.command("press")
def cmd_press(
    keys: list[str] = typer.Argument(help="Keys to press, e.g. 5 + 3 = or '5+3='"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the final display"),
) -> None:
    """Press a sequence of keys and show the display after each one."""
    display = Display()
    try:
        captions = _parse_keys(keys)
        shown = display.press_many(captions)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if quiet:
        typer.echo(display.text)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key", style="dim", justify="center")
    table.add_column("Display", justify="right")
    for caption, text in zip(captions, shown):
        table.add_row(caption, f"[{_display_style(text)}]{text}[/]")
    console.print(table)


@app.command("format")
def cmd_format(
    number: str = typer.Argument(help="Number to render, e.g. 1234567.891"),
) -> None:
    """Render a number the way the display shows it."""
    engine = CalculatorEngine()
    try:
        value = parse_number(number, engine.fmt)
    except DisplayParseError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    typer.echo(engine.number_to_string(value))


@app.command("repl")
def cmd_repl() -> None:
    """Interactive session: type keys, see the display. 'q' quits."""
    display = Display()
    console.print(f"Display: [{_display_style(display.text)}]{display.text}[/]")

    while True:
        try:
            line = console.input("[bold]keys>[/bold] ")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        try:
            display.press_many(split_keys(line))
        except ValueError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            continue
        marker = f" [dim]({display.selected.value})[/dim]" if display.selected else ""
        console.print(f"Display: [{_display_style(display.text)}]{display.text}[/]{marker}")


if __name__ == "__main__":
    app()
