"""Typer CLI application."""

import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any, Optional, Union

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from restpane.cli.core.shortcuts import LayoutCommandDispatcher, get_shortcut_registry, parse_chord
from restpane.cli.core.terminal import Terminal
from restpane.cli.widgets.status_bar import describe_state
from restpane.core.geometry import Chrome
from restpane.core.regions import OVERLAY_REGIONS, Orientation, PaneGroup, RegionID
from restpane.layout.engine import LayoutEngine
from restpane.layout.state import LayoutResult
from restpane.settings import (
    LayoutSettings,
    LayoutSettingsError,
    default_settings_path,
    load_settings,
    save_settings,
)

console = Console()

LOG_LEVEL_ENV = "RESTPANE_LOG_LEVEL"
_LOG_FORMAT = "%(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich. Level from $RESTPANE_LOG_LEVEL."""
    level = logging.DEBUG if verbose else logging.getLevelName(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_collapse_target(token: str) -> Union[PaneGroup, RegionID]:
    """A pane group name ("sidebar") or a single region ("workflows")."""
    key = token.strip().lower()
    for group in PaneGroup:
        if group.value == key:
            return group
    return RegionID.parse(key)


def build_engine(
    width: Optional[int] = None,
    height: Optional[int] = None,
    chrome: Chrome = Chrome(),
    settings: Optional[LayoutSettings] = None,
    stacked: bool = False,
    compare: Optional[str] = None,
    workflows: bool = False,
    collapse: Optional[list[str]] = None,
    zoom: Optional[str] = None,
    focus: Optional[str] = None,
) -> LayoutEngine:
    """
    Engine sized for a frame with the requested state applied.

    Width and height default to the current terminal. Raises ValueError
    for unknown region, group or orientation names.
    """
    engine = LayoutEngine()
    state = engine.state
    if settings is not None:
        state = settings.apply_to(state, engine.config)
    if stacked:
        state = state.evolve(main_orientation=Orientation.STACKED)
    if compare:
        state = state.evolve(response_split=True, response_orientation=Orientation.parse(compare))
    state = state.evolve(has_workflows=workflows)
    engine.replace_state(state)
    engine.set_chrome(chrome)

    if width is None or height is None:
        size = Terminal.size()
        width = size.cols if width is None else width
        height = size.rows if height is None else height
    engine.resize(width, height)

    for token in collapse or []:
        target = parse_collapse_target(token)
        if isinstance(target, PaneGroup):
            outcome = engine.set_group_collapse(target, True)
        else:
            outcome = engine.set_collapse_state(target, True)
        if outcome.blocked:
            raise ValueError(f"cannot collapse {token}: nothing would be left to focus")
    if zoom:
        if not engine.toggle_zoom(PaneGroup(zoom.strip().lower())):
            raise ValueError(f"cannot zoom {zoom}: nothing to show")
    if focus:
        region = RegionID.parse(focus)
        if not engine.set_focus(region):
            raise ValueError(f"cannot focus {focus}: region is hidden")
    return engine


def layout_to_dict(engine: LayoutEngine) -> dict[str, Any]:
    """JSON-ready summary of the engine's state and boxes."""
    result = engine.result
    state = engine.state
    data: dict[str, Any] = {
        "frame": {"width": engine.frame.width, "height": engine.frame.height},
        "focus": state.focus.value,
        "zoom": state.zoom.value if state.zoom else None,
        "collapsed": sorted(region.value for region in state.collapsed),
        "ratios": {
            "sidebar_width": round(state.sidebar_width, 4),
            "sidebar_split": round(state.sidebar_split, 4),
            "workflow_split": round(state.workflow_split, 4),
            "editor_split": round(state.editor_split, 4),
            "response_split": round(state.response_split_ratio, 4),
        },
        "main_orientation": state.main_orientation.value,
        "response_split": state.response_split,
        "response_orientation": state.response_orientation.value,
        "regions": {},
    }
    if result is not None:
        data["body_height"] = result.body_height
        data["sidebar_width"] = result.sidebar_width
        data["main_width"] = result.main_width
        data["regions"] = {
            region.value: {"width": box.width, "height": box.height} for region, box in result
        }
    return data


def layout_table(engine: LayoutEngine, result: LayoutResult) -> Table:
    cfg = engine.config
    table = Table(title=f"Layout {result.frame.width}x{result.frame.height}", title_justify="left")
    table.add_column("Region", style="bold")
    table.add_column("Box", justify="right")
    table.add_column("Content", justify="right")
    table.add_column("Emphasis")
    for region, box in result:
        if region in OVERLAY_REGIONS:
            content = box
        else:
            content = box.inset(cfg.content_inset_width, cfg.content_inset_height)
        emphasis = engine.focus.emphasis(engine.state, region)
        table.add_row(
            region.value,
            f"{box.width}x{box.height}",
            f"{content.width}x{content.height}",
            emphasis.value,
        )
    return table


def print_layout(engine: LayoutEngine, json_output: bool) -> None:
    if json_output:
        print(json.dumps(layout_to_dict(engine), indent=2))
        return
    result = engine.result
    if result is None:
        console.print("[yellow]Terminal size unknown[/]")
        return
    console.print(layout_table(engine, result))
    console.print(f"[dim]{describe_state(engine.state)}[/]")


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="restpane",
        help="Inspect and drive the restpane terminal pane layout.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )

    @app.callback()
    def main(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log layout decisions to stderr")] = False,
    ) -> None:
        configure_logging(verbose)

    def load(path: Optional[Path]) -> Optional[LayoutSettings]:
        if path is None:
            return None
        try:
            return load_settings(path, strict=True)
        except LayoutSettingsError as exc:
            console.print(f"[red]{exc}[/]")
            raise typer.Exit(1)

    def engine_or_exit(**kwargs: Any) -> LayoutEngine:
        try:
            return build_engine(**kwargs)
        except ValueError as exc:
            console.print(f"[red]{exc}[/]")
            raise typer.Exit(2)

    @app.command()
    def show(
        width: Annotated[Optional[int], typer.Option("--width", "-W", min=1, help="Terminal columns (default: current)")] = None,
        height: Annotated[Optional[int], typer.Option("--height", "-H", min=1, help="Terminal rows (default: current)")] = None,
        header: Annotated[int, typer.Option("--header", min=0, help="Header rows")] = 1,
        command_bar: Annotated[int, typer.Option("--command-bar", min=0, help="Command bar rows")] = 1,
        status_bar: Annotated[int, typer.Option("--status-bar", min=0, help="Status bar rows")] = 1,
        stacked: Annotated[bool, typer.Option("--stacked", "-s", help="Stack editor above response")] = False,
        compare: Annotated[Optional[str], typer.Option("--compare", "-c", help="Split the response: side_by_side or stacked")] = None,
        workflows: Annotated[bool, typer.Option("--workflows", "-w", help="Show the workflow list")] = False,
        collapse: Annotated[Optional[list[str]], typer.Option("--collapse", help="Collapse a pane group or region (repeatable)")] = None,
        zoom: Annotated[Optional[str], typer.Option("--zoom", "-z", help="Zoom a pane group")] = None,
        focus: Annotated[Optional[str], typer.Option("--focus", "-f", help="Region to focus")] = None,
        settings: Annotated[Optional[Path], typer.Option("--settings", help="Layout settings file to apply")] = None,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Compute and print every region box for a terminal size."""
        engine = engine_or_exit(
            width=width,
            height=height,
            chrome=Chrome(header, command_bar, status_bar),
            settings=load(settings),
            stacked=stacked,
            compare=compare,
            workflows=workflows,
            collapse=collapse,
            zoom=zoom,
            focus=focus,
        )
        print_layout(engine, json_output)

    @app.command()
    def keys(
        chords: Annotated[list[str], typer.Argument(help='Key chords to replay, e.g. "g l" tab ctrl+v')],
        width: Annotated[Optional[int], typer.Option("--width", "-W", min=1, help="Terminal columns (default: current)")] = None,
        height: Annotated[Optional[int], typer.Option("--height", "-H", min=1, help="Terminal rows (default: current)")] = None,
        workflows: Annotated[bool, typer.Option("--workflows", "-w", help="Show the workflow list")] = False,
        settings: Annotated[Optional[Path], typer.Option("--settings", help="Settings file to load and save to")] = None,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Replay key chords through the layout bindings."""
        loaded = load(settings) if settings is not None and settings.exists() else None
        engine = engine_or_exit(width=width, height=height, settings=loaded, workflows=workflows)
        dispatcher = LayoutCommandDispatcher(engine, settings)
        messages: list[str] = []
        for chord in chords:
            for key in parse_chord(chord):
                message = dispatcher.handle_key(key)
                if message:
                    messages.append(message)
        if json_output:
            data = layout_to_dict(engine)
            data["messages"] = messages
            print(json.dumps(data, indent=2))
            return
        for message in messages:
            console.print(f"[cyan]»[/] {message}")
        print_layout(engine, False)

    @app.command("save-layout")
    def save_layout(
        sidebar_width: Annotated[Optional[float], typer.Option("--sidebar-width", help="Sidebar share of the width")] = None,
        editor_split: Annotated[Optional[float], typer.Option("--editor-split", help="Editor share of the main area")] = None,
        stacked: Annotated[bool, typer.Option("--stacked", "-s", help="Stack editor above response")] = False,
        compare: Annotated[Optional[str], typer.Option("--compare", "-c", help="Split the response: side_by_side or stacked")] = None,
        compare_ratio: Annotated[Optional[float], typer.Option("--compare-ratio", help="Primary response share")] = None,
        path: Annotated[Optional[Path], typer.Option("--path", "-p", help="Settings file (default: config dir)")] = None,
    ) -> None:
        """Write layout settings to disk."""
        defaults = LayoutSettings()
        try:
            orientation = Orientation.parse(compare) if compare else defaults.response_orientation
        except ValueError as exc:
            console.print(f"[red]{exc}[/]")
            raise typer.Exit(2)
        settings = LayoutSettings(
            sidebar_width=sidebar_width if sidebar_width is not None else defaults.sidebar_width,
            editor_split=editor_split if editor_split is not None else defaults.editor_split,
            main_split=Orientation.STACKED if stacked else Orientation.SIDE_BY_SIDE,
            response_split=compare is not None,
            response_split_ratio=compare_ratio if compare_ratio is not None else defaults.response_split_ratio,
            response_orientation=orientation,
        ).normalised()
        try:
            written = save_settings(settings, path)
        except LayoutSettingsError as exc:
            console.print(f"[red]{exc}[/]")
            raise typer.Exit(1)
        console.print(f"[green]Saved layout to {written}[/]")
        console.print(str(settings))

    @app.command("bindings")
    def bindings() -> None:
        """List the layout key bindings."""
        for line in get_shortcut_registry().generate_help_text(width=80):
            console.print(line, highlight=False)

    @app.command()
    def inspect(
        settings: Annotated[Optional[Path], typer.Option("--settings", help="Settings file (default: config dir)")] = None,
        workflows: Annotated[bool, typer.Option("--workflows", "-w", help="Show the workflow list")] = False,
    ) -> None:
        """Interactive layout inspector."""
        from restpane.cli.inspector import run_inspector

        path = settings or default_settings_path()
        engine = LayoutEngine()
        state = load_settings(path).apply_to(engine.state, engine.config)
        engine.replace_state(state.evolve(has_workflows=workflows))
        run_inspector(engine, path)

    return app
