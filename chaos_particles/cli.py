"""Command line entry point."""

import logging

import click
import numpy as np

from . import config
from .attractors import ATTRACTORS, get_attractor
from .errors import ConfigurationError
from .logging_config import setup_logging
from .particles import ParticleStore
from .simulation import Simulation, default_camera
from .stepper import SimulationConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_simulation(equation, steps, dt_exponent, seed=None):
    """Assemble a Simulation from command line values; raises ConfigurationError."""
    sim = SimulationConfig(
        attractor=get_attractor(equation),
        substeps=steps,
        dt_exponent=dt_exponent,
    )
    store = ParticleStore(rng=np.random.default_rng(seed))
    return Simulation(sim=sim, camera=default_camera(), store=store)


@click.command()
@click.option('--equation', '-e', type=click.Choice(list(ATTRACTORS)), default=config.DEFAULT_EQUATION,
              show_default=True, help='Equation active at start')
@click.option('--steps', '-s', type=int, default=config.DEFAULT_SUBSTEPS, show_default=True,
              help='Substeps per integration tick')
@click.option('--dt-exponent', '-d', type=float, default=config.DEFAULT_DT_EXPONENT, show_default=True,
              help='Step size is SIM_DT * 2^exponent')
@click.option('--seed', type=int, default=None, help='Seed for cluster jitter')
@click.option('--width', '-w', type=int, default=config.WIDTH, show_default=True, help='Window width')
@click.option('--height', '-H', type=int, default=config.HEIGHT, show_default=True, help='Window height')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='INFO',
              show_default=True)
@click.option('--log-file', type=click.Path(dir_okay=False), default=None, help='Also write the log here')
def main(equation, steps, dt_exponent, seed, width, height, log_level, log_file):
    """Spawn particles into a chaotic flow and orbit around them.

    \b
    Mouse:  left button spawns (hold left shift for a cluster of 20)
            left alt + drag orbits, left ctrl + drag pans, z + drag / wheel zooms
    Keys:   1-4 pick the equation, c clears, keypad +/- substeps, [ ] step size
    """
    setup_logging(getattr(logging, log_level.upper()), log_file)

    if width <= 0 or height <= 0:
        raise click.BadParameter(f"window size must be positive, got {width}x{height}")

    try:
        simulation = build_simulation(equation, steps, dt_exponent, seed)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    # window stack is imported lazily
    from .app import run
    run(simulation, width, height)


if __name__ == '__main__':
    main()
