"""Scene geometry derived from oscillator state (display pixels, y down)."""

from .config import PhysicsConfig
from .oscillator import OscillatorState


def equilibrium_y(sag: float, physics: PhysicsConfig) -> float:
    """Y of the equilibrium line."""
    return physics.anchor_y + physics.rest_length + sag


def mass_y(state: OscillatorState, sag: float, physics: PhysicsConfig) -> float:
    """Y of the top of the hook, where the spring attaches."""
    return equilibrium_y(sag, physics) + state.offset


def center_y(state: OscillatorState, sag: float, physics: PhysicsConfig) -> float:
    """Y of the top edge of the block, half a block below the hook."""
    return mass_y(state, sag, physics) + physics.block_size / 2


def natural_stretch(state: OscillatorState, sag: float) -> float:
    """Spring extension past its unstretched rest length, in pixels."""
    return sag + state.offset


def drag_bounds(sag: float, physics: PhysicsConfig):
    """(min, max) offset reachable by dragging."""
    eq = equilibrium_y(sag, physics)
    top = physics.anchor_y + physics.drag_top_margin
    return top - eq, physics.drag_max_y - eq
