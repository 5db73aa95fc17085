#!/usr/bin/env python3
"""
🎵 iTunes Library Parser - inspect an iTunes Library.xml export
CLI interface with Typer and Rich
"""

from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from itunes_library.core.config import ConfigurationManager, get_config
from itunes_library.core.errors import ITunesLibraryError
from itunes_library.core.parser import LibraryParser
from itunes_library.utils.field_dump import describe
from itunes_library.utils.log_setup import configure_logging

console = Console()

app = typer.Typer(
    name="itunes-library",
    help="🎵 Inspect an iTunes Library.xml export",
    add_completion=False,
    rich_markup_mode="rich",
)

_state: Dict[str, Any] = {"config": None}


def _config() -> ConfigurationManager:
    return _state["config"] or get_config()


@app.callback()
def main_callback(
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to a config.yml file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ...)"
    ),
) -> None:
    """🎵 Inspect an iTunes Library.xml export"""
    config = ConfigurationManager(config_path) if config_path else get_config()
    _state["config"] = config

    logging_config = config.logging_config
    configure_logging(log_level or logging_config["level"], logging_config["file"])


def show_banner() -> None:
    """Display the app banner"""
    banner = Text()
    banner.append("🎵 ", style="bold magenta")
    banner.append("iTunes Library Parser", style="bold cyan")
    console.print(Panel(banner, style="cyan", padding=(0, 2)))


def _parse(xml_path: str) -> LibraryParser:
    """Parse the library, turning fatal errors into exit code 1."""
    library_parser = LibraryParser(xml_path, settings=_config().parser_settings)
    with console.status(
        f"[bold green]Parsing library from: {xml_path}[/bold green]", spinner="dots"
    ):
        try:
            library_parser.parse()
        except ITunesLibraryError as e:
            console.print(f"[red]❌ Parse failed: {e}[/red]")
            raise typer.Exit(1)
    return library_parser


def _fields_table(title: str, rows: list) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key, value in rows:
        table.add_row(key, "" if value is None else value)
    return table


@app.command()
def summary(
    xml_path: str = typer.Argument(..., help="Path to iTunes XML library file"),
) -> None:
    """📊 Show library properties and parse statistics"""
    show_banner()
    library_parser = _parse(xml_path)
    settings = library_parser.settings

    library = library_parser.get_library()
    if library is not None:
        console.print(_fields_table("📚 Library", describe(library, settings)))
    else:
        console.print("[yellow]⚠️  No library properties found[/yellow]")

    stats = Table(title="📊 Parse Statistics", show_header=True, header_style="bold magenta")
    stats.add_column("Metric", style="cyan")
    stats.add_column("Value", style="green")
    for name, value in library_parser.stats.to_dict().items():
        stats.add_row(name.replace("_", " ").title(), str(value))
    console.print(stats)


@app.command()
def tracks(
    xml_path: str = typer.Argument(..., help="Path to iTunes XML library file"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum rows to show (0 = all)"),
) -> None:
    """🎶 List tracks"""
    library_parser = _parse(xml_path)
    all_tracks = list(library_parser.get_tracks().values())
    shown = all_tracks if limit <= 0 else all_tracks[:limit]

    table = Table(
        title=f"🎶 Tracks ({len(shown)} of {len(all_tracks)})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Artist", style="green")
    table.add_column("Album", style="yellow")
    for track in shown:
        table.add_row(
            str(track.track_id), track.name or "", track.artist or "", track.album or ""
        )
    console.print(table)


@app.command()
def playlists(
    xml_path: str = typer.Argument(..., help="Path to iTunes XML library file"),
) -> None:
    """📋 List playlists"""
    library_parser = _parse(xml_path)

    table = Table(title="📋 Playlists", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Tracks", style="green", justify="right")
    table.add_column("Smart", style="yellow")
    for playlist in library_parser.get_playlists().values():
        table.add_row(
            str(playlist.playlist_id),
            playlist.name or "",
            str(len(playlist.playlist_items)),
            "yes" if playlist.is_smart else "",
        )
    console.print(table)


@app.command("show-track")
def show_track(
    xml_path: str = typer.Argument(..., help="Path to iTunes XML library file"),
    track_id: int = typer.Argument(..., help="Track ID"),
) -> None:
    """🔍 Show every field of one track"""
    library_parser = _parse(xml_path)
    track = library_parser.get_tracks().get(track_id)
    if track is None:
        console.print(f"[red]❌ No track with ID {track_id}[/red]")
        raise typer.Exit(1)

    console.print(
        _fields_table(f"🎵 Track {track_id}", describe(track, library_parser.settings))
    )


@app.command("show-playlist")
def show_playlist(
    xml_path: str = typer.Argument(..., help="Path to iTunes XML library file"),
    playlist_id: int = typer.Argument(..., help="Playlist ID"),
) -> None:
    """🔍 Show one playlist and its tracks in order"""
    library_parser = _parse(xml_path)
    playlist = library_parser.get_playlists().get(playlist_id)
    if playlist is None:
        console.print(f"[red]❌ No playlist with ID {playlist_id}[/red]")
        raise typer.Exit(1)

    console.print(
        _fields_table(
            f"📋 Playlist {playlist_id}", describe(playlist, library_parser.settings)
        )
    )

    table = Table(title="Items", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Artist", style="green")
    for position, (track_id, track) in enumerate(playlist.playlist_items.items(), 1):
        if track is None:
            table.add_row(str(position), str(track_id), "[red]missing[/red]", "")
        else:
            table.add_row(str(position), str(track_id), track.name or "", track.artist or "")
    console.print(table)


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
