"""
CLI interface for Game Detector.

Commands:
    gamedetect launchers  - Show which launchers are installed
    gamedetect list       - List installed games
    gamedetect dirs       - Print game install directories
    gamedetect json       - Print installed games as JSON
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from game_detector import __version__
from game_detector.config.paths import BaseDirs
from game_detector.config.settings import settings
from game_detector.games.detector import GamesDetector, get_detector
from game_detector.games.models import Game, SupportedLauncher
from game_detector.logging_config import setup_logging

app = typer.Typer(
    name="gamedetect",
    help="Game Detector - Find games installed by Linux game launchers",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Game Detector[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug log messages",
    ),
    home: Optional[Path] = typer.Option(
        None,
        "--home",
        help="Search this home directory instead of the current user's",
    ),
) -> None:
    """
    Game Detector - Find games installed by Linux game launchers.

    Supports Steam, Heroic, Lutris, Bottles, Prism Launcher, ATLauncher and itch.
    """
    setup_logging(logging.DEBUG if verbose else settings.LOG_LEVEL)
    ctx.obj = BaseDirs.from_home(home) if home else settings.get_base_dirs()


def _get_detector(ctx: typer.Context) -> GamesDetector:
    return get_detector(ctx.obj)


def _get_games(
    detector: GamesDetector,
    launcher: Optional[SupportedLauncher],
    with_box_art: bool = False,
) -> list[Game]:
    if launcher is not None:
        games = detector.get_all_detected_games_from_specific_launcher(launcher)
        if with_box_art:
            games = [g for g in games if g.path_box_art is not None]
        return games

    if with_box_art:
        return detector.get_all_detected_games_with_box_art()
    return detector.get_all_detected_games()


@app.command()
def launchers(ctx: typer.Context) -> None:
    """
    Show which supported launchers are installed.
    """
    detector = _get_detector(ctx)
    result = detector.detect_all()

    table = Table(title="Launchers")
    table.add_column("Launcher", style="white")
    table.add_column("Installed", style="green")
    table.add_column("Games", style="cyan", justify="right")

    for launcher_type, is_detected in result.detected.items():
        table.add_row(
            launcher_type.display_name,
            "Yes" if is_detected else "-",
            str(len(result.games[launcher_type])) if is_detected else "-",
        )

    console.print(table)

    if not result.detected_launchers:
        console.print("[yellow]No supported launchers found.[/yellow]")


@app.command("list")
def list_games(
    ctx: typer.Context,
    launcher: Optional[SupportedLauncher] = typer.Option(
        None,
        "--launcher",
        "-l",
        help="Only show games of this launcher",
    ),
    with_box_art: bool = typer.Option(
        False,
        "--with-box-art",
        "-b",
        help="Only show games which have box art",
    ),
) -> None:
    """
    List installed games.

    Shows every game found by the supported launchers with optional filtering.
    """
    games = _get_games(_get_detector(ctx), launcher, with_box_art)

    if not games:
        console.print("[yellow]No games found matching the criteria.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Installed Games")
    table.add_column("Title", style="white")
    table.add_column("Launcher", style="green")
    table.add_column("Launch command", style="cyan")
    table.add_column("Box art", style="yellow")

    for game in games:
        table.add_row(
            game.title,
            game.source.display_name,
            game.launch_command.to_shell(),
            "Yes" if game.path_box_art else "-",
        )

    console.print(table)
    console.print(f"\nTotal: {len(games)} games")


@app.command()
def dirs(
    ctx: typer.Context,
    prefix: Optional[str] = typer.Option(
        None,
        "--prefix",
        "-p",
        help="Only print directories starting with this path",
    ),
) -> None:
    """
    Print the install directory of every game, one per line.
    """
    games = _get_detector(ctx).get_all_detected_games()

    paths = [game.path_game_dir for game in games if game.path_game_dir is not None]
    if prefix:
        paths = [path for path in paths if str(path).startswith(prefix)]

    if not paths:
        console.print("[yellow]No game directories found.[/yellow]")
        raise typer.Exit(0)

    for path in paths:
        typer.echo(str(path))


@app.command("json")
def to_json(
    ctx: typer.Context,
    launcher: Optional[SupportedLauncher] = typer.Option(
        None,
        "--launcher",
        "-l",
        help="Only include games of this launcher",
    ),
) -> None:
    """
    Print installed games as a JSON array.
    """
    games = _get_games(_get_detector(ctx), launcher)
    typer.echo(json.dumps([game.to_dict() for game in games], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
