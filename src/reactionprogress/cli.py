"""Command-line entrypoints for Reaction Progress."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from reactionprogress.charts import axis_maximum, extent_series
from reactionprogress.config import Settings, load_settings
from reactionprogress.constants import SLOT_COUNT
from reactionprogress.display import from_display, unit_label
from reactionprogress.errors import ReactionError
from reactionprogress.models import DisplayMode
from reactionprogress.reaction import Reaction, validate_molar_mass

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

CoefficientsOption = Annotated[
    str | None,
    typer.Option(help="Six comma separated coefficients for A,B,C,X,Y,Z (reactants negative)."),
]
InitialOption = Annotated[
    str | None,
    typer.Option("--initial", help="Six comma separated initial amounts, in the display mode's unit."),
]
MolarMassesOption = Annotated[
    str | None, typer.Option(help="Six comma separated molar masses (g/mol).")
]
ModeOption = Annotated[
    DisplayMode | None, typer.Option(case_sensitive=False, help="Display mode.")
]
PercentOption = Annotated[
    float | None, typer.Option(help="Percent complete, 0 to 100.")
]
ExtentOption = Annotated[
    float | None, typer.Option(help="Extent of reaction (mol).")
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", exists=True, dir_okay=False, help="Path to JSON settings file."),
]
OutputOption = Annotated[
    Path | None, typer.Option(help="Path to save output JSON.")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    """Extent-of-reaction calculator for a single six-species reaction."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _parse_slots(text: str, label: str) -> list[float]:
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != SLOT_COUNT:
        raise typer.BadParameter(f"expected {SLOT_COUNT} comma separated values", param_hint=label)
    try:
        return [float(part) for part in parts]
    except ValueError:
        raise typer.BadParameter(f"'{text}' is not a list of numbers", param_hint=label)


def _build_reaction(
    settings: Settings,
    coefficients: str | None,
    initial: str | None,
    molar_masses: str | None,
    mode: DisplayMode | None,
    percent: float | None,
    extent: float | None,
) -> Reaction:
    if percent is not None and extent is not None:
        raise typer.BadParameter("use either --percent or --extent, not both")
    if percent is not None and math.isnan(percent):
        raise typer.BadParameter("must be a number", param_hint="--percent")

    mode = mode or settings.mode
    masses = (
        _parse_slots(molar_masses, "--molar-masses")
        if molar_masses is not None
        else list(settings.molar_masses)
    )
    if initial is not None:
        for molar_mass in masses:
            validate_molar_mass(molar_mass)
        amounts = [
            from_display(value, masses[slot], mode)
            for slot, value in enumerate(_parse_slots(initial, "--initial"))
        ]
    else:
        amounts = list(settings.initial_amounts)

    # All inputs are validated together, so partial edits never need to be feasible.
    reaction = Reaction(
        coefficients=(
            _parse_slots(coefficients, "--coefficients")
            if coefficients is not None
            else settings.coefficients
        ),
        initial_amounts=amounts,
        molar_masses=masses,
        mode=mode,
        max_moles=settings.max_moles,
    )
    if percent is not None:
        reaction.set_extent_by_percent(percent)
    elif extent is not None:
        reaction.set_extent_direct(extent)
    return reaction


def _load_reaction(
    config: Path | None,
    coefficients: str | None,
    initial: str | None,
    molar_masses: str | None,
    mode: DisplayMode | None,
    percent: float | None,
    extent: float | None,
) -> tuple[Settings, Reaction]:
    try:
        settings = load_settings(config)
    except ValueError as exc:
        typer.echo(f"Error in settings: {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        reaction = _build_reaction(
            settings, coefficients, initial, molar_masses, mode, percent, extent
        )
    except ReactionError as exc:
        logger.warning("Rejected input: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    return settings, reaction


def _emit(payload: Dict[str, Any], output: Path | None) -> None:
    json_output = json.dumps(payload, indent=2)
    typer.echo(json_output)
    if output:
        with open(output, "w") as f:
            f.write(json_output)


@app.command()
def show(
    coefficients: CoefficientsOption = None,
    initial: InitialOption = None,
    molar_masses: MolarMassesOption = None,
    mode: ModeOption = None,
    percent: PercentOption = None,
    extent: ExtentOption = None,
    config: ConfigOption = None,
    output: OutputOption = None,
) -> None:
    """Print the reaction state at the requested extent as JSON."""
    _, reaction = _load_reaction(
        config, coefficients, initial, molar_masses, mode, percent, extent
    )
    _emit(reaction.recompute().as_dict(), output)


@app.command()
def sweep(
    coefficients: CoefficientsOption = None,
    initial: InitialOption = None,
    molar_masses: MolarMassesOption = None,
    mode: ModeOption = None,
    percent: PercentOption = None,
    extent: ExtentOption = None,
    points: Annotated[
        int | None, typer.Option(min=2, help="Number of extents sampled across the range.")
    ] = None,
    config: ConfigOption = None,
    output: OutputOption = None,
) -> None:
    """Print every species' amount across the feasible extent range as JSON."""
    settings, reaction = _load_reaction(
        config, coefficients, initial, molar_masses, mode, percent, extent
    )
    snapshot = reaction.recompute()
    extents, series = extent_series(snapshot, points=points or settings.graph_points)
    _emit(
        {
            "unit": unit_label(snapshot.mode),
            "extent": snapshot.extent,
            "percent_complete": snapshot.percent_complete,
            "axis_maximum": axis_maximum(snapshot),
            "extents": extents.tolist(),
            "species": {name: values.tolist() for name, values in series.items()},
        },
        output,
    )
