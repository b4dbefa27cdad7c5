"""Command-line interface for Gantry."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer

from . import context
from .config import GantryConfig, LabelPosition, discover_config, load_config, resolve_density
from .datemath import format_date, parse_date
from .exceptions import GantryError
from .labels import LabelPaddingEstimator
from .layout import build_layout
from .loader import load_chart
from .logger import VERBOSITY_DEBUG, VERBOSITY_SILENT, setup_logger
from .navigation import NavigationController
from .scale import compute_scale, header_cells

app = typer.Typer(
    name="gantry",
    help="Gantt timeline geometry - scales, task layout and dependency arrows",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=VERBOSITY_SILENT,
            max=VERBOSITY_DEBUG,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: gantry_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for gantry commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1) from None


def _resolve_config(file: Path | None = None) -> GantryConfig:
    """Config from --config, else next to the input file, else defaults."""
    config_path = context.get_config_path()
    if config_path is not None:
        return load_config(config_path)
    return discover_config(file.parent if file is not None else None)


def _emit(data: dict[str, Any], output: Path | None = None) -> None:
    text = json.dumps(data, indent=2)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Layout written to {output}")
    else:
        typer.echo(text)


@app.command()
def scale(
    min_date: Annotated[str, typer.Argument(help="First date of the range (YYYY-MM-DD)")],
    max_date: Annotated[str, typer.Argument(help="Last date of the range (YYYY-MM-DD)")],
    zoom: Annotated[float, typer.Option("--zoom", "-z", help="Zoom multiplier")] = 1.0,
    viewport_width: Annotated[
        float, typer.Option("--viewport-width", "-w", help="Viewport width in pixels")
    ] = 800,
) -> None:
    """Print the timeline scale and header cells for a date range."""
    try:
        config = _resolve_config()
        timeline = compute_scale(
            min_date,
            max_date,
            viewport_width,
            config.scale.clamp_zoom(zoom),
            config=config.scale,
        )
    except (GantryError, FileNotFoundError, ValueError) as e:
        _fail(str(e))
        return

    data = asdict(timeline)
    data["headers"] = [
        [
            asdict(cell)
            for cell in header_cells(
                timeline,
                tier,
                week_start=config.scale.week_start,
                week_numbering=config.scale.week_numbering,
            )
        ]
        for tier in timeline.tiers
    ]
    _emit(data)


@app.command()
def layout(
    file: Annotated[Path, typer.Argument(help="Path to the chart YAML file")] = Path("chart.yaml"),
    zoom: Annotated[float | None, typer.Option("--zoom", "-z", help="Zoom multiplier")] = None,
    density: Annotated[
        str | None,
        typer.Option("--density", "-d", help="Density preset: compact, normal or comfortable"),
    ] = None,
    no_weekends: Annotated[
        bool, typer.Option("--no-weekends", help="Omit weekend bands from the grid")
    ] = False,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Date of the today marker (default: current date)"),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Compute task geometry, dependency arrows and grid for a chart file."""
    try:
        config = _resolve_config(file)
        chart = load_chart(file)
        profile = resolve_density(density) if density else config.density_profile()
        if today is not None:
            parse_date(today)
    except (GantryError, FileNotFoundError) as e:
        _fail(str(e))
        return

    nav = NavigationController(config)
    nav.update_scale(chart.tasks)
    if zoom is not None and not nav.set_zoom(zoom).accepted:
        _fail(f"Invalid zoom: {zoom}")
    assert nav.scale is not None

    arrow_style = config.arrows if "arrows" in config.model_fields_set else None
    chart_layout = build_layout(
        chart.tasks,
        chart.dependencies,
        nav.scale,
        profile,
        show_weekends=config.grid.show_weekends and not no_weekends,
        header_height=config.header_height,
        arrow_style=arrow_style,
        grid_config=config.grid,
        week_start=config.scale.week_start,
        today=today or format_date(date.today()),
    )
    _emit(chart_layout.to_dict(), output)


@app.command()
def fit(
    file: Annotated[Path, typer.Argument(help="Path to the chart YAML file")] = Path("chart.yaml"),
    viewport_width: Annotated[
        float, typer.Option("--viewport-width", "-w", help="Viewport width in pixels")
    ] = 800,
    label_position: Annotated[
        LabelPosition | None,
        typer.Option("--label-position", help="Where task labels are drawn"),
    ] = None,
) -> None:
    """Print the zoom and date range that fit every task in the viewport."""
    try:
        config = _resolve_config(file)
        chart = load_chart(file)
        profile = config.density_profile()
    except (GantryError, FileNotFoundError) as e:
        _fail(str(e))
        return

    estimator = LabelPaddingEstimator(
        label_position=label_position or config.label_position,
        font_size=profile.font_size_bar,
    )
    nav = NavigationController(config, viewport_width=viewport_width)
    result = nav.fit_to_view(chart.tasks, label_padding_estimator=estimator)
    if not result.accepted:
        _fail(result.reason or "fit rejected")

    state = nav.state
    _emit(
        {
            "zoom": state.zoom,
            "date_range": asdict(state.date_range) if state.date_range else None,
            "pixels_per_day": state.scale.pixels_per_day if state.scale else None,
            "total_width": state.scale.total_width if state.scale else None,
            "scroll_left": result.scroll_left,
        }
    )


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
