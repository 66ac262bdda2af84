"""
SpringLab command line.

    springlab explore  [--config PATH] [--mode MODE] [-v]
    springlab simulate [--config PATH] [--mass M] [--stiffness K] [--damping D]
                       [--offset X] [--ticks N] [--output PNG] [--json PATH] [-v]
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from .config import DISPLAY_MODES, SpringLabConfig
from .oscillator import OscillatorParams

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='springlab',
                                     description='Damped spring-mass oscillator explorer')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--config', type=str, help='JSON configuration file')

    sub = parser.add_subparsers(dest='command')

    explore = sub.add_parser('explore', help='Open the interactive window (default)')
    explore.add_argument('--mode', choices=DISPLAY_MODES, help='Initial display mode')

    sim = sub.add_parser('simulate', help='Run headless and save a figure and/or JSON summary')
    sim.add_argument('--mass', type=float, help='Mass in kg (default: slider default)')
    sim.add_argument('--stiffness', '-k', type=float, help='Spring constant (default: slider default)')
    sim.add_argument('--damping', '-d', type=float, help='Damping factor (default: slider default)')
    sim.add_argument('--offset', type=float, default=100.0,
                     help='Initial offset from equilibrium in px (default: 100)')
    sim.add_argument('--ticks', '-n', type=int, default=600, help='Ticks to run (default: 600)')
    sim.add_argument('--output', '-o', type=str, help='Save the trace figure to this path')
    sim.add_argument('--json', type=str, help='Write a JSON summary to this path')

    return parser


def load_config(path) -> SpringLabConfig:
    if path is None:
        return SpringLabConfig()
    return SpringLabConfig.from_json(path)


def run_simulate(args, config: SpringLabConfig) -> int:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend for saving figures

    from .headless import plot_run, simulate, summarize

    defaults = config.default_params()
    params = OscillatorParams(
        mass=args.mass if args.mass is not None else defaults.mass,
        stiffness=args.stiffness if args.stiffness is not None else defaults.stiffness,
        damping_factor=args.damping if args.damping is not None else defaults.damping_factor,
    )
    logger.info(f"Params: mass={params.mass}, k={params.stiffness}, damping={params.damping_factor}")

    result = simulate(params, initial_offset=args.offset, ticks=args.ticks, config=config)
    summary = summarize(result)

    for key, value in summary.items():
        logger.info(f"  {key}: {value}")

    if args.output:
        plot_run(result, save_path=args.output)
    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, 'w') as f:
            json.dump({'params': asdict(params), 'summary': summary}, f, indent=2)
        logger.info(f"Saved: {json_path}")
    return 0


def run_explore(args, config: SpringLabConfig) -> int:
    import matplotlib
    matplotlib.use('TkAgg')  # Interactive backend

    from .visualization.spring_explorer import main as explore_main

    explore_main(config, mode=getattr(args, 'mode', None))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load config: {e}")
        return 2

    if args.command == 'simulate':
        if args.ticks < 0:
            logger.error(f"--ticks must be non-negative, got {args.ticks}")
            return 2
        return run_simulate(args, config)
    return run_explore(args, config)


if __name__ == '__main__':
    sys.exit(main())
