"""CLI command for printing a deal."""

from __future__ import annotations

import logging

import click

from plokmin.engine.codec import encode_state
from plokmin.engine.dealer import new_game
from plokmin.engine.errors import InvalidSeedError
from plokmin.engine.snapshot import state_to_json
from plokmin.engine.variants import VARIANTS, get_variant
from plokmin.playtest.display import StateRenderer

logger = logging.getLogger(__name__)


@click.command()
@click.argument("seed", type=int)
@click.option(
    "--variant",
    type=click.Choice(sorted(VARIANTS)),
    default="freecell",
    show_default=True,
    help="Game to deal",
)
@click.option(
    "--draw",
    type=click.Choice(["1", "3"]),
    default="1",
    show_default=True,
    help="Klondike cards per draw",
)
@click.option("--code", "as_code", is_flag=True, help="Print a share code instead of the board")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON snapshot instead of the board")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(seed: int, variant: str, draw: str, as_code: bool, as_json: bool, verbose: bool):
    """Print the opening deal for SEED."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    if as_code and as_json:
        raise click.UsageError("--code and --json are mutually exclusive")

    try:
        state = new_game(seed, get_variant(variant, int(draw)))
    except InvalidSeedError as e:
        raise click.BadParameter(str(e), param_hint="SEED")

    if as_code:
        click.echo(encode_state(state))
    elif as_json:
        click.echo(state_to_json(state))
    else:
        click.echo(StateRenderer().render(state))


if __name__ == "__main__":
    main()
