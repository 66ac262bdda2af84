"""
Damping sweep figures.

Runs the oscillator headless for several damping factors and saves the
displacement traces and heat curves side by side.

Run: python scripts/damping_sweep.py [--ticks N] [--output DIR]
"""

import argparse
import logging
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from springlab import OscillatorParams
from springlab.headless import simulate

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DAMPING_FACTORS = (0.9, 0.95, 0.98, 0.995, 0.999)


def generate_damping_sweep(ticks: int, output_dir: Path, mass: float = 5.0,
                           stiffness: float = 0.1, offset: float = 100.0) -> Path:
    fig, (ax_x, ax_h) = plt.subplots(1, 2, figsize=(14, 5))
    colors = plt.cm.viridis(np.linspace(0, 0.9, len(DAMPING_FACTORS)))

    for damping, color in zip(DAMPING_FACTORS, colors):
        params = OscillatorParams(mass=mass, stiffness=stiffness, damping_factor=damping)
        result = simulate(params, initial_offset=offset, ticks=ticks)
        ax_x.plot(result['tick'], result['offset'], color=color, label=f'd = {damping}')
        ax_h.plot(result['tick'], result['heat'], color=color, label=f'd = {damping}')
        logger.info(f"d={damping}: heat={result['heat'][-1]:.2f}, "
                    f"final offset={result['offset'][-1]:+.3f}")

    ax_x.set_title(f'Displacement (m={mass}, k={stiffness})')
    ax_x.set_xlabel('Tick')
    ax_x.set_ylabel('Offset (px)')
    ax_x.legend(fontsize=8)
    ax_x.grid(True, alpha=0.3)

    ax_h.set_title('Cumulative heat')
    ax_h.set_xlabel('Tick')
    ax_h.set_ylabel('Energy')
    ax_h.legend(fontsize=8)
    ax_h.grid(True, alpha=0.3)

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / 'damping_sweep.png'
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"Saved: {path}")
    return path


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Damping sweep figures')
    parser.add_argument('--ticks', type=int, default=1200, help='Ticks per run (default: 1200)')
    parser.add_argument('--output', type=str, default='figures', help='Output directory')
    args = parser.parse_args()

    generate_damping_sweep(args.ticks, Path(args.output))
