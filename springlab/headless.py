"""
Headless runs of the spring-mass simulation.

Drives a SimulationContext exactly as the explorer does (drag the mass into
place while stopped, press start, tick) and records the trace as numpy
arrays, for figures, JSON summaries and tests.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import matplotlib.pyplot as plt

from .config import SpringLabConfig
from .oscillator import OscillatorParams
from .simulation import SimulationContext, TickInputs

logger = logging.getLogger(__name__)

TRACE_KEYS = ('tick', 'offset', 'velocity', 'kinetic', 'elastic', 'gravitational', 'heat')


def simulate(params: OscillatorParams, initial_offset: float = 100.0, ticks: int = 600,
             config: Optional[SpringLabConfig] = None, record_every: int = 1) -> Dict:
    """
    Run the oscillator from rest at `initial_offset` for `ticks` ticks.

    The initial offset goes through the drag path, so it is clamped to the
    draggable range like a pointer would be.

    Args:
        params: Mass, stiffness and damping for the whole run
        initial_offset: Starting offset from the equilibrium line (px)
        ticks: Number of running ticks
        config: SpringLab configuration (defaults if None)
        record_every: Record every N ticks

    Returns:
        Dict of arrays keyed by TRACE_KEYS (first sample is the start
        state), plus 'reference_total_energy' as a float
    """
    if ticks < 0:
        raise ValueError(f"ticks must be non-negative, got {ticks}")
    if record_every < 1:
        raise ValueError(f"record_every must be >= 1, got {record_every}")

    ctx = SimulationContext(config)
    base = dict(mass=params.mass, stiffness=params.stiffness,
                damping_factor=params.damping_factor)

    ctx.set_params(params)
    start_y = ctx.equilibrium_y + initial_offset
    grab = (ctx.config.physics.anchor_x, ctx.center_y)
    ctx.tick(TickInputs(**base, dragging=True, pointer_y=start_y, press_at=grab))

    history = {key: [] for key in TRACE_KEYS}

    def record(i):
        e = ctx.energies()
        history['tick'].append(i)
        history['offset'].append(ctx.state.offset)
        history['velocity'].append(ctx.state.velocity)
        history['kinetic'].append(e.kinetic)
        history['elastic'].append(e.elastic)
        history['gravitational'].append(e.gravitational)
        history['heat'].append(ctx.account.cumulative_heat)

    record(0)
    # the first tick starts the run, then steps
    for i in range(1, ticks + 1):
        ctx.tick(TickInputs(**base, run_toggle=(i == 1)))
        if i % record_every == 0:
            record(i)

    logger.info(f"Simulated {ticks} ticks, recorded {len(history['tick'])} samples")

    result = {key: np.array(values) for key, values in history.items()}
    result['reference_total_energy'] = ctx.account.reference_total_energy
    return result


def summarize(result: Dict) -> Dict:
    """Plain-float summary of a run, suitable for JSON."""
    return {
        'ticks': int(result['tick'][-1]),
        'final_offset': float(result['offset'][-1]),
        'final_velocity': float(result['velocity'][-1]),
        'max_abs_offset': float(np.max(np.abs(result['offset']))),
        'total_heat': float(result['heat'][-1]),
        'reference_total_energy': float(result['reference_total_energy']),
    }


def plot_run(result: Dict, save_path: Optional[Union[str, Path]] = None):
    """
    Two-panel figure: displacement and energies against ticks.

    Returns:
        The matplotlib Figure
    """
    fig, (ax_x, ax_e) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    t = result['tick']

    ax_x.plot(t, result['offset'], color='blue', linewidth=1.2)
    ax_x.axhline(0, color='gray', linestyle='--', alpha=0.6)
    ax_x.set_ylabel('Offset (px)')
    ax_x.set_title('Displacement from equilibrium')
    ax_x.grid(True, alpha=0.3)

    ax_e.plot(t, result['kinetic'], color='red', label='KE')
    ax_e.plot(t, result['elastic'], color='green', label='PE(elas)')
    ax_e.plot(t, result['gravitational'], color='blue', label='PE(grav)')
    ax_e.plot(t, result['heat'], color='orange', label='Heat')
    ax_e.axhline(result['reference_total_energy'], color='purple', linestyle=':',
                 label='Reference total')
    ax_e.set_xlabel('Tick')
    ax_e.set_ylabel('Energy')
    ax_e.legend(loc='upper right', fontsize=8)
    ax_e.grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=150)
        logger.info(f"Saved: {save_path}")

    return fig
