"""
Energy bookkeeping for the spring-mass oscillator.

Instantaneous energies:
    KE   = 1/2 m v^2
    PEe  = 1/2 k s^2          s = stretch past the unstretched rest length, meters
    PEg  = m g h              h = height of the block above the reference line, meters

Heat is the kinetic energy removed by the damping multiplication each tick,
accumulated over a run. The reference total is snapshot when a run starts.

KE uses velocity in pixels per tick, as the chart always has; PEe and PEg
use meters (40 px = 1 m by default). PEe is returned unscaled; the chart
applies its own display scale.
"""

import logging
from dataclasses import dataclass

from .config import PhysicsConfig
from .geometry import center_y, natural_stretch
from .oscillator import OscillatorParams, OscillatorState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnergyReadout:
    kinetic: float = 0.0
    elastic: float = 0.0
    gravitational: float = 0.0

    @property
    def total(self) -> float:
        return self.kinetic + self.elastic + self.gravitational


def kinetic_energy(state: OscillatorState, params: OscillatorParams) -> float:
    return 0.5 * params.mass * state.velocity ** 2


def elastic_energy(state: OscillatorState, params: OscillatorParams, sag: float,
                   physics: PhysicsConfig) -> float:
    stretch_m = natural_stretch(state, sag) / physics.pixels_per_meter
    return 0.5 * params.stiffness * stretch_m ** 2


def gravitational_energy(state: OscillatorState, params: OscillatorParams, sag: float,
                         physics: PhysicsConfig) -> float:
    height_m = (physics.pe_reference_y - center_y(state, sag, physics)) / physics.pixels_per_meter
    return params.mass * physics.gravity * height_m


def current_energies(state: OscillatorState, params: OscillatorParams, sag: float,
                     physics: PhysicsConfig = PhysicsConfig()) -> EnergyReadout:
    """
    Compute KE, PE(elastic) and PE(gravitational) for the current state.

    Args:
        state: Oscillator state
        params: Current parameters
        sag: Equilibrium offset for these parameters (see equilibrium_offset)
        physics: Scales and geometry

    Returns:
        EnergyReadout with unscaled values
    """
    return EnergyReadout(
        kinetic=kinetic_energy(state, params),
        elastic=elastic_energy(state, params, sag, physics),
        gravitational=gravitational_energy(state, params, sag, physics),
    )


def heat_delta(velocity_before: float, velocity_after: float, mass: float) -> float:
    """Kinetic energy removed by damping in one tick, never negative."""
    dE = 0.5 * mass * (velocity_before ** 2 - velocity_after ** 2)
    return max(dE, 0.0)


def discrete_invariant(state: OscillatorState, params: OscillatorParams) -> float:
    """
    Quadratic form preserved exactly by the undamped semi-implicit step.

        H = 1/2 k x^2 + 1/2 m v^2 - 1/2 k x v

    With damping_factor == 1 this is constant from tick to tick, while the
    plain 1/2 m v^2 + 1/2 k x^2 wobbles in a bounded band around it.
    """
    x, v = state.offset, state.velocity
    k, m = params.stiffness, params.mass
    return 0.5 * k * x * x + 0.5 * m * v * v - 0.5 * k * x * v


class EnergyAccount:
    """
    Reference total energy and cumulative heat for the current run.

    Lifecycle:
        snapshot(readout)  -- stopped -> running: record total, zero heat
        accumulate_heat()  -- once per running tick
        reset()            -- zero both
    """

    def __init__(self):
        self.reference_total_energy = 0.0
        self.cumulative_heat = 0.0

    def snapshot(self, readout: EnergyReadout):
        self.reference_total_energy = readout.total
        self.cumulative_heat = 0.0
        logger.debug(f"Reference total energy: {self.reference_total_energy:.3f}")

    def accumulate_heat(self, velocity_before: float, velocity_after: float, mass: float) -> float:
        """Add this tick's damping loss; returns the amount added."""
        dE = heat_delta(velocity_before, velocity_after, mass)
        self.cumulative_heat += dE
        return dE

    def reset(self):
        self.reference_total_energy = 0.0
        self.cumulative_heat = 0.0

    def __repr__(self):
        return (f"EnergyAccount(reference_total_energy={self.reference_total_energy:.3f}, "
                f"cumulative_heat={self.cumulative_heat:.3f})")
