"""Command-line interface for axis label layout."""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import get_config
from .models.axis import AxisConfig, AxisRegion, AxisSpec, LabelSettings, ScaleSpec
from .services.measure_service import MonospaceTextMeasurer, PillowTextMeasurer, TextMeasurer
from .services.pipeline_service import AxisLabels

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """Axis Labels - lay out chart tick labels without overlaps."""
    pass


@main.command()
@click.argument("axis_path", type=click.Path())
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(axis_path: str, force: bool):
    """Write a sample axis file."""
    path = Path(axis_path)
    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {path} already exists (use --force to overwrite)")
        raise SystemExit(1)

    spec = AxisSpec(
        axis=AxisConfig(
            position="bottom",
            region=AxisRegion(width=400, height=40),
            labels=LabelSettings(rotate=45, truncate=12, filter=True, font_size=12),
        ),
        scale=ScaleSpec(
            type="band",
            domain=[f"Category {name}" for name in ("One", "Two", "Three", "Four", "Five", "Six")],
            range=(0, 400),
        ),
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    spec.to_yaml(path)
    console.print(f"[green]Created axis file:[/green] {path}")


@main.command()
@click.argument("axis_path", type=click.Path(exists=True, dir_okay=False))
def info(axis_path: str):
    """Show the configuration of an axis file."""
    spec = _load_spec(Path(axis_path))
    axis = spec.axis

    table = Table(title=f"Axis: {axis_path}")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    table.add_row("position", axis.position.value)
    table.add_row("orientation", "horizontal" if axis.is_horizontal else "vertical")
    table.add_row("region", f"{axis.region.width:g} x {axis.region.height:g} px")
    for name, value in axis.labels.model_dump().items():
        table.add_row(f"labels.{name}", repr(value))
    table.add_row("scale", f"{spec.scale.type} {spec.scale.domain} -> {list(spec.scale.range)}")
    console.print(table)


@main.command()
@click.argument("axis_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--measurer",
    type=click.Choice(["pillow", "monospace"]),
    default=None,
    help="Text measurer (default from AXISLABELS_MEASURER)",
)
@click.option("--font", type=click.Path(), help="TrueType font used by the pillow measurer")
@click.option("--json", "as_json", is_flag=True, help="Print labels as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log layout decisions")
def layout(axis_path: str, measurer: Optional[str], font: Optional[str], as_json: bool, verbose: bool):
    """Lay out the tick labels of an axis file."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    spec = _load_spec(Path(axis_path))
    try:
        scale = spec.build_scale()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    axis_labels = AxisLabels(spec.axis, scale, _make_measurer(measurer, font))
    try:
        labels = axis_labels.render(values=spec.ticks, count=spec.tick_count)
    except KeyError as e:
        console.print(f"[red]Error:[/red] tick {e} is not in the scale domain")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([lbl.to_dict() for lbl in labels], indent=2))
        return

    table = Table(title=f"Labels: {axis_path}")
    table.add_column("#", justify="right")
    table.add_column("Value")
    table.add_column("Text")
    table.add_column("Size", justify="right")
    table.add_column("Anchor")
    table.add_column("Transform")
    table.add_column("Visible")

    for i, lbl in enumerate(labels):
        size = f"{lbl.size.width:.1f} x {lbl.size.height:.1f}" if lbl.size else "-"
        shown = lbl.visible and lbl.displayed
        table.add_row(
            str(i),
            str(lbl.value),
            lbl.text,
            size,
            lbl.anchor.value,
            lbl.rotation.to_svg() if lbl.rotation else "-",
            "[green]yes[/green]" if shown else "[dim]no[/dim]",
        )

    console.print(table)
    kept = sum(1 for lbl in labels if lbl.visible)
    console.print(f"[bold]Kept:[/bold] {kept} of {len(labels)} labels")


def _load_spec(path: Path) -> AxisSpec:
    try:
        return AxisSpec.from_yaml(path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Axis file not found: {path}")
        raise SystemExit(1)
    except yaml.YAMLError as e:
        console.print(f"[red]Error:[/red] Invalid YAML in {path}: {escape(str(e))}")
        raise SystemExit(1)
    except (TypeError, ValidationError) as e:
        console.print(f"[red]Error:[/red] Invalid axis file {path}:\n{escape(str(e))}")
        raise SystemExit(1)


def _make_measurer(name: Optional[str], font: Optional[str]) -> TextMeasurer:
    try:
        config = get_config()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid configuration in environment:\n{escape(str(e))}")
        raise SystemExit(1)
    name = name or config.measurer
    if name == "monospace":
        return MonospaceTextMeasurer(
            char_width_ratio=config.char_width_ratio,
            line_height_ratio=config.line_height_ratio,
            default_font_size=config.default_font_size,
        )
    return PillowTextMeasurer(
        font_path=font or config.font_path,
        default_font_size=config.default_font_size,
    )


if __name__ == "__main__":
    main()
