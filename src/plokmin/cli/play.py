"""CLI command for playing a game in the terminal."""

from __future__ import annotations

import logging

import click

from plokmin.engine.codec import decode_state
from plokmin.engine.errors import InvalidSeedError, SerializationError
from plokmin.engine.rng import validate_seed
from plokmin.engine.variants import VARIANTS
from plokmin.playtest.session import PlaytestSession, SessionConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--variant",
    type=click.Choice(sorted(VARIANTS)),
    default=None,
    help="Game to play [default: freecell]",
)
@click.option("--seed", type=int, default=None, help="Deal seed (random if omitted)")
@click.option(
    "--draw",
    type=click.Choice(["1", "3"]),
    default=None,
    help="Klondike cards per draw [default: 1]",
)
@click.option("--auto/--no-auto", default=True, help="Play safe foundation moves automatically")
@click.option("--hints/--no-hints", default=False, help="Mark the next cards each foundation needs")
@click.option("--load", "share_code", default=None, help="Resume from a share code")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    variant: str | None,
    seed: int | None,
    draw: str | None,
    auto: bool,
    hints: bool,
    share_code: str | None,
    verbose: bool,
):
    """Play FreeCell or Klondike in the terminal."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    if seed is not None:
        try:
            validate_seed(seed)
        except InvalidSeedError as e:
            raise click.BadParameter(str(e), param_hint="--seed")

    initial_state = None
    if share_code:
        conflicting = [
            name for name, value in (("--variant", variant), ("--seed", seed), ("--draw", draw))
            if value is not None
        ]
        if conflicting:
            raise click.UsageError(
                f"--load restores the saved game; it cannot be combined with {', '.join(conflicting)}"
            )
        try:
            initial_state = decode_state(share_code)
        except SerializationError as e:
            raise click.BadParameter(str(e), param_hint="--load")
        variant = initial_state.variant.key
        draw = str(initial_state.variant.draw_count)

    config = SessionConfig(
        variant=variant or "freecell",
        draw_count=int(draw or "1"),
        seed=seed,
        auto_move=auto,
        hints=hints,
    )

    session = PlaytestSession(config, initial_state=initial_state)
    result = session.run(output_fn=click.echo)

    if result.won:
        click.echo(f"\nSolved {result.variant} seed {result.seed} in {result.moves} moves.")


if __name__ == "__main__":
    main()
