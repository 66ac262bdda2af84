"""
Damped Spring-Mass Integrator

Advances a vertically hanging spring-mass oscillator by one fixed tick
using semi-implicit Euler:

    a      = -k * x / m
    v_pre  = v + a
    v'     = v_pre * d          (d = damping factor, per-tick retention)
    x'     = x + v'

x is measured from the equilibrium line, i.e. the rest length plus the
static sag of the spring under the hanging mass. Units are display pixels
and ticks; the energy module converts to meters where needed.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OscillatorState:
    """Offset from the equilibrium line (px) and velocity (px/tick)."""
    offset: float = 0.0
    velocity: float = 0.0

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.offset) and np.isfinite(self.velocity))


@dataclass(frozen=True)
class OscillatorParams:
    """Slider-controlled parameters, read once per tick."""
    mass: float = 5.0
    stiffness: float = 0.1
    damping_factor: float = 0.995

    def is_valid(self) -> bool:
        """True if every value is finite and the mass is positive."""
        values = (self.mass, self.stiffness, self.damping_factor)
        return bool(np.all(np.isfinite(values)) and self.mass > 0)


class TickResult(NamedTuple):
    state: OscillatorState
    acceleration: float
    velocity_before_damping: float


def equilibrium_offset(params: OscillatorParams, sim_gravity: float = 0.6,
                       min_stiffness: float = 1e-4, max_sag: float = 350.0) -> float:
    """
    Static sag of the spring under the hanging mass.

    sag = m * g_sim / k, with k floored at min_stiffness and the result
    clipped to [0, max_sag].
    """
    k = max(params.stiffness, min_stiffness)
    sag = params.mass * sim_gravity / k
    return float(np.clip(sag, 0.0, max_sag))


def acceleration(state: OscillatorState, params: OscillatorParams) -> float:
    """Restoring acceleration (Hooke's law) at the current offset."""
    if not params.is_valid() or not state.is_finite():
        return 0.0
    force = -params.stiffness * state.offset
    return force / params.mass


def integrate_tick(state: OscillatorState, params: OscillatorParams) -> TickResult:
    """
    Advance one tick and return the new state with its intermediates.

    Non-finite input (or a non-positive mass) freezes the oscillator: the
    prior state comes back unchanged with zero acceleration, so nothing
    downstream sees NaN. The same applies if the step itself overflows.

    Args:
        state: Current offset/velocity
        params: Mass, stiffness and damping factor for this tick

    Returns:
        TickResult(state, acceleration, velocity_before_damping)
    """
    frozen = TickResult(state, 0.0, state.velocity)

    if not params.is_valid() or not state.is_finite():
        logger.warning(f"Freezing oscillator: invalid input state={state} params={params}")
        return frozen

    acc = acceleration(state, params)
    v_before = state.velocity + acc
    v_after = v_before * params.damping_factor
    new_state = OscillatorState(offset=state.offset + v_after, velocity=v_after)

    if not new_state.is_finite():
        logger.warning(f"Freezing oscillator: step from {state} diverged")
        return frozen

    return TickResult(new_state, acc, v_before)


def advance(state: OscillatorState, params: OscillatorParams) -> OscillatorState:
    """One integrator tick: (state, params) -> state'."""
    return integrate_tick(state, params).state
