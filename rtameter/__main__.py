"""Entry point for the rtameter CLI."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

import click
from rich.console import Console

from .config import DEFAULT_CONFIG_PATH, MeterConfig
from .demo_data import band_centers
from .frame import Frame
from .rta import Band
from .tui.widgets.rta_meter import render_meter_text
from .utils import parse_csv_floats, parse_csv_ints

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, log_file: Path | None = None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=str(log_file) if log_file else None,
    )


def _exit_on_errors(config: MeterConfig) -> None:
    errors = config.validate()
    if errors:
        for e in errors:
            click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@click.group()
def main() -> None:
    """rtameter - Real-Time Analyzer meter for the terminal."""


@main.command()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=DEFAULT_CONFIG_PATH,
              show_default=True, help="Meter config file.")
@click.option("--bands", type=int, default=None, help="Number of frequency bands.")
@click.option("--min-db", type=float, default=None, help="Floor of the dB scale (negative).")
@click.option("--fps", type=int, default=None, help="Redraws per second.")
@click.option("--no-labels", is_flag=True, help="Hide the peak readout.")
@click.option("--no-highlight", is_flag=True, help="Do not recolor the peak band.")
@click.option("--no-frame", is_flag=True, help="Draw without the surrounding border.")
@click.option("--seed", type=int, default=None, help="Seed for the synthetic spectrum.")
@click.option("--log-file", type=click.Path(path_type=Path), default=None,
              help="Write logs here (the terminal belongs to the meter).")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def demo(
    config_path: Path,
    bands: int | None,
    min_db: float | None,
    fps: int | None,
    no_labels: bool,
    no_highlight: bool,
    no_frame: bool,
    seed: int | None,
    log_file: Path | None,
    verbose: bool,
) -> None:
    """Run the live meter on a synthetic spectrum."""
    try:
        config = MeterConfig.load(config_path)
    except (ValueError, json.JSONDecodeError) as e:
        click.echo(f"Error: cannot read {config_path}: {e}", err=True)
        raise SystemExit(1)
    if bands is not None:
        config.band_count = bands
    if min_db is not None:
        config.min_db = min_db
    if fps is not None:
        config.fps = fps
    if no_labels:
        config.show_peak_labels = False
    if no_highlight:
        config.highlight_peak = False
    if no_frame:
        config.show_frame = False
    _exit_on_errors(config)

    if log_file:
        _setup_logging(verbose, log_file)
    else:
        logging.disable(logging.CRITICAL)

    from .app import RTAMeterApp

    logger.info("Starting demo with config %s", config)
    RTAMeterApp(config, seed=seed).run()


@main.command()
@click.option("--width", type=int, default=80, show_default=True, help="Columns to render.")
@click.option("--height", type=int, default=20, show_default=True, help="Rows to render.")
@click.option("--values", default="", help="Comma separated band ratios in [0, 1].")
@click.option("--frequencies", default="", help="Comma separated band frequencies in Hz.")
@click.option("--db", "as_db", is_flag=True, help="Interpret --values as dBFS instead of ratios.")
@click.option("--min-db", type=float, default=MeterConfig.min_db, show_default=True,
              help="Floor of the dB scale (negative).")
@click.option("--no-labels", is_flag=True, help="Hide the peak readout.")
@click.option("--no-highlight", is_flag=True, help="Do not recolor the peak band.")
@click.option("--frame", "with_frame", is_flag=True, help="Draw a border around the meter.")
@click.option("--title", default="RTA", show_default=True, help="Border title, with --frame.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def snapshot(
    width: int,
    height: int,
    values: str,
    frequencies: str,
    as_db: bool,
    min_db: float,
    no_labels: bool,
    no_highlight: bool,
    with_frame: bool,
    title: str,
    verbose: bool,
) -> None:
    """Render a single meter frame to stdout."""
    _setup_logging(verbose)

    if width < 0 or height < 0:
        raise click.BadParameter("width and height must not be negative")
    if not (min_db < 0 and math.isfinite(min_db)):
        raise click.BadParameter(f"{min_db} is not a finite negative number", param_hint="--min-db")

    try:
        levels = parse_csv_floats(values)
        freqs = parse_csv_ints(frequencies)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    if not levels:
        click.echo("Error: No band values given. Use --values.", err=True)
        raise SystemExit(1)
    if not freqs:
        freqs = band_centers(len(levels))
    if len(freqs) != len(levels):
        raise click.BadParameter(
            f"got {len(levels)} values but {len(freqs)} frequencies",
            param_hint="--frequencies",
        )

    bands = []
    for level, freq in zip(levels, freqs):
        band = Band(0.0, freq)
        if as_db:
            band.set_db(level, min_db)
        else:
            band.set_ratio(level)
        bands.append(band)
    logger.debug("Rendering %d bands into %dx%d", len(bands), width, height)

    text = render_meter_text(
        bands,
        width,
        height,
        min_db=min_db,
        show_peak_labels=not no_labels,
        highlight_peak=not no_highlight,
        frame=Frame(title=title) if with_frame else None,
    )
    Console(width=max(width, 1)).print(text, soft_wrap=False)


@main.command()
@click.option("--path", type=click.Path(path_type=Path), default=DEFAULT_CONFIG_PATH, show_default=True)
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init_config(path: Path, force: bool) -> None:
    """Write a default meter config file."""
    if MeterConfig.exists(path) and not force:
        click.echo(f"Error: {path} already exists. Use --force to overwrite.", err=True)
        raise SystemExit(1)
    MeterConfig().save(path)
    click.echo(f"Config saved to {path}")


if __name__ == "__main__":
    main()
