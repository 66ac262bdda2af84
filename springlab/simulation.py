"""
Simulation context: the single owner of all mutable simulation state.

One call to SimulationContext.tick() processes a frame:

    1. reset event, OR parameter sampling (equilibrium recomputed, offset
       rebased); a reset tick keeps the default parameters
    2. run toggle (stopped -> running snapshots the reference energy)
    3. pointer press (drag start or hint), pointer release (drag end)
    4. drag write (stopped and dragging) OR integrator step (running)
    5. hint decay, outputs for rendering

Drag writes and integrator steps are mutually exclusive, gated by `running`.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .config import SpringLabConfig
from .energy import EnergyAccount, EnergyReadout, current_energies
from .geometry import center_y, drag_bounds, equilibrium_y, mass_y
from .oscillator import (
    OscillatorParams,
    OscillatorState,
    acceleration,
    equilibrium_offset,
    integrate_tick,
)

logger = logging.getLogger(__name__)


class DisplacementHistory:
    """Bounded FIFO of offset samples, oldest first. Plotting only."""

    def __init__(self, capacity: int = 300):
        self.capacity = capacity
        self._samples = deque(maxlen=capacity)

    def append(self, offset: float):
        self._samples.append(offset)

    def clear(self):
        self._samples.clear()

    def snapshot(self) -> Tuple[float, ...]:
        return tuple(self._samples)

    def as_array(self) -> np.ndarray:
        return np.fromiter(self._samples, dtype=float, count=len(self._samples))

    def __len__(self):
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)


@dataclass(frozen=True)
class TickInputs:
    """Everything the host samples from the UI for one tick."""
    mass: float
    stiffness: float
    damping_factor: float
    run_toggle: bool = False
    reset: bool = False
    dragging: bool = False              # pointer button held
    pointer_y: Optional[float] = None
    press_at: Optional[Tuple[float, float]] = None   # latched press (x, y)

    @property
    def params(self) -> OscillatorParams:
        return OscillatorParams(self.mass, self.stiffness, self.damping_factor)


@dataclass(frozen=True)
class TickOutputs:
    """Everything the renderers read after a tick."""
    state: OscillatorState
    energies: EnergyReadout
    cumulative_heat: float
    reference_total_energy: float
    history: Tuple[float, ...]
    acceleration: float
    equilibrium_offset: float
    running: bool


class SimulationContext:
    """
    Spring-mass simulation state and the operations that mutate it.

    Constructing a context initializes it: default parameters, mass at rest
    on the equilibrium line, stopped, empty history, zero energies.
    """

    def __init__(self, config: Optional[SpringLabConfig] = None):
        self.config = config or SpringLabConfig()
        self.account = EnergyAccount()
        self.history = DisplacementHistory(self.config.physics.history_capacity)
        self.reset()

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def reset(self):
        """Reinitialize everything; sliders return to their defaults."""
        self.params = self.config.default_params()
        self.running = False
        self.dragging = False
        self.hint = 0
        self.history.clear()
        self.account.reset()
        self.sag = self._equilibrium_for(self.params)
        self.state = OscillatorState(offset=0.0, velocity=0.0)
        logger.info("Simulation reset")

    # -------------------------------------------------------------------------
    # EVENTS
    # -------------------------------------------------------------------------

    def set_params(self, params: OscillatorParams):
        """
        Sample new slider values.

        The mass keeps its absolute position when the equilibrium line
        moves, so the offset is re-expressed against the new line.
        Non-finite values are ignored and the previous parameters kept.
        """
        if not params.is_valid():
            logger.warning(f"Ignoring invalid parameters: {params}")
            return
        self.params = params
        new_sag = self._equilibrium_for(params)
        if new_sag != self.sag:
            self.state = OscillatorState(
                offset=self.state.offset - (new_sag - self.sag),
                velocity=self.state.velocity,
            )
            self.sag = new_sag

    def toggle_running(self) -> bool:
        self.running = not self.running
        if self.running:
            self.dragging = False
            self.account.snapshot(self.energies())
            logger.info(f"Running (reference energy {self.account.reference_total_energy:.2f})")
        else:
            logger.info("Stopped")
        return self.running

    def begin_drag(self, pointer_x: float, pointer_y: float) -> bool:
        """
        Start dragging if the pointer is on the block and the sim is stopped.

        A click that misses the block arms the hint circle instead.
        """
        if self.running:
            return False

        physics = self.config.physics
        dist = np.hypot(pointer_x - physics.anchor_x, pointer_y - self.center_y)
        if dist < physics.block_size / 2:
            self.dragging = True
            self.history.clear()
            logger.debug(f"Drag started at y={pointer_y:.1f}")
            return True

        self.hint = self.config.display.hint_frames
        return False

    def drag_to(self, pointer_y: float):
        """Place the mass under the pointer (clamped) and zero its velocity."""
        if self.running or not self.dragging:
            return
        if not np.isfinite(pointer_y):
            return
        physics = self.config.physics
        top = physics.anchor_y + physics.drag_top_margin
        y = float(np.clip(pointer_y, top, physics.drag_max_y))
        self.state = OscillatorState(offset=y - self.equilibrium_y, velocity=0.0)

    def end_drag(self):
        self.dragging = False

    def step(self):
        """One integrator tick with heat and history bookkeeping."""
        if not self.running:
            return
        prior_offset = self.state.offset
        result = integrate_tick(self.state, self.params)
        self.state = result.state
        self.account.accumulate_heat(result.velocity_before_damping,
                                     result.state.velocity, self.params.mass)
        self.history.append(prior_offset)

    def tick(self, inputs: TickInputs) -> TickOutputs:
        """Process one frame of input and return the outputs for rendering."""
        if inputs.reset:
            self.reset()
        else:
            self.set_params(inputs.params)

        if inputs.run_toggle:
            self.toggle_running()

        if inputs.press_at is not None:
            self.begin_drag(*inputs.press_at)
        if self.dragging and not inputs.dragging:
            self.end_drag()

        if self.running:
            self.step()
        elif self.dragging and inputs.pointer_y is not None:
            self.drag_to(inputs.pointer_y)

        self.hint = max(self.hint - 1, 0)
        return self.outputs()

    # -------------------------------------------------------------------------
    # READOUTS
    # -------------------------------------------------------------------------

    def energies(self) -> EnergyReadout:
        return current_energies(self.state, self.params, self.sag, self.config.physics)

    def outputs(self) -> TickOutputs:
        return TickOutputs(
            state=self.state,
            energies=self.energies(),
            cumulative_heat=self.account.cumulative_heat,
            reference_total_energy=self.account.reference_total_energy,
            history=self.history.snapshot(),
            acceleration=acceleration(self.state, self.params),
            equilibrium_offset=self.sag,
            running=self.running,
        )

    @property
    def equilibrium_y(self) -> float:
        return equilibrium_y(self.sag, self.config.physics)

    @property
    def mass_y(self) -> float:
        return mass_y(self.state, self.sag, self.config.physics)

    @property
    def center_y(self) -> float:
        return center_y(self.state, self.sag, self.config.physics)

    @property
    def drag_bounds(self) -> Tuple[float, float]:
        return drag_bounds(self.sag, self.config.physics)

    def _equilibrium_for(self, params: OscillatorParams) -> float:
        physics = self.config.physics
        return equilibrium_offset(params, physics.sim_gravity,
                                  physics.min_stiffness, physics.max_sag)
