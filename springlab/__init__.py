"""
SpringLab - Damped Spring-Mass Oscillator

Core physics and energy bookkeeping for an interactive spring-mass
visualization, plus the matplotlib explorer that drives it.
"""

from .oscillator import (
    OscillatorParams,
    OscillatorState,
    TickResult,
    acceleration,
    advance,
    equilibrium_offset,
    integrate_tick,
)
from .energy import (
    EnergyAccount,
    EnergyReadout,
    current_energies,
    discrete_invariant,
    heat_delta,
)
from .config import (
    DISPLAY_MODES,
    DisplayConfig,
    PhysicsConfig,
    SliderConfig,
    SliderRange,
    SpringLabConfig,
)
from .simulation import (
    DisplacementHistory,
    SimulationContext,
    TickInputs,
    TickOutputs,
)

__all__ = [
    # Integrator
    'OscillatorParams',
    'OscillatorState',
    'TickResult',
    'acceleration',
    'advance',
    'equilibrium_offset',
    'integrate_tick',
    # Energy
    'EnergyAccount',
    'EnergyReadout',
    'current_energies',
    'discrete_invariant',
    'heat_delta',
    # Config
    'DISPLAY_MODES',
    'DisplayConfig',
    'PhysicsConfig',
    'SliderConfig',
    'SliderRange',
    'SpringLabConfig',
    # Simulation
    'DisplacementHistory',
    'SimulationContext',
    'TickInputs',
    'TickOutputs',
]

__version__ = '0.1.0'
