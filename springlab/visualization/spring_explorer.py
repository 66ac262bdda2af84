"""
================================================================================
SPRINGLAB - INTERACTIVE SPRING-MASS EXPLORER
================================================================================

Matplotlib window around a SimulationContext:
- Mass / k / damping sliders
- Beginner / Intermediate / Advanced display modes
- SPACE starts and stops the simulation
- Drag the weight (while stopped) to set the initial position
- Reset returns sliders and state to their defaults

Run: springlab explore

================================================================================
"""

import logging
from typing import Optional

import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.widgets import Button, Slider

from ..config import DISPLAY_MODES, SpringLabConfig
from ..simulation import SimulationContext, TickInputs, TickOutputs
from .drawing import (
    draw_displacement_arrow,
    draw_displacement_graph,
    draw_energy_chart,
    draw_hint,
    draw_scene,
    draw_stopped_banner,
    draw_vectors,
    energy_bars,
)

logger = logging.getLogger(__name__)

SPACE_KEYS = (' ', 'space')


class SpringMassExplorer:
    """
    Interactive damped spring-mass oscillator.

    Widget callbacks only latch events; everything that touches the
    simulation happens in step_frame(), once per animation frame.
    """

    def __init__(self, config: Optional[SpringLabConfig] = None):
        self.config = config or SpringLabConfig()
        self.context = SimulationContext(self.config)
        self.mode = self.config.display.mode

        # Animation
        self.anim = None

        # Latched events, consumed by the next frame
        self._pending_toggle = False
        self._pending_reset = False
        self._press_at = None
        self._mouse_down = False
        self._pointer_y = None

        self._setup_figure()
        self._update_all_displays(self.context.outputs())

    def _setup_figure(self):
        """Create figure, axes, widgets and event hooks."""
        self.fig = plt.figure(figsize=(13, 8))
        self.fig.patch.set_facecolor('#dce9f3')

        # Layout:
        # Left column: sliders, mode buttons, energy chart
        # Centre: scene | Right: displacement graph
        self.ax_scene = self.fig.add_axes([0.30, 0.04, 0.42, 0.92])
        self.ax_energy = self.fig.add_axes([0.05, 0.06, 0.20, 0.45])
        self.ax_graph = self.fig.add_axes([0.77, 0.12, 0.20, 0.25])

        # Sliders
        sliders = self.config.sliders
        ax_mass = self.fig.add_axes([0.08, 0.92, 0.15, 0.025])
        ax_k = self.fig.add_axes([0.08, 0.88, 0.15, 0.025])
        ax_damping = self.fig.add_axes([0.08, 0.84, 0.15, 0.025])

        self.slider_mass = Slider(ax_mass, 'Mass (kg)', sliders.mass.min, sliders.mass.max,
                                  valinit=sliders.mass.init, valstep=sliders.mass.step,
                                  color='#555555')
        self.slider_k = Slider(ax_k, 'k (N/m)', sliders.stiffness.min, sliders.stiffness.max,
                               valinit=sliders.stiffness.init, valstep=sliders.stiffness.step,
                               color='#555555')
        self.slider_damping = Slider(ax_damping, 'Damping', sliders.damping.min,
                                     sliders.damping.max, valinit=sliders.damping.init,
                                     valstep=sliders.damping.step, color='#555555')

        # Mode and reset buttons
        self.mode_buttons = []
        for i, mode in enumerate(DISPLAY_MODES):
            ax_btn = self.fig.add_axes([0.02 + i * 0.075, 0.74, 0.07, 0.04])
            btn = Button(ax_btn, mode, color='#e0e0e0', hovercolor='#c0c0c0')
            btn.on_clicked(lambda event, m=mode: self.set_mode(m))
            self.mode_buttons.append(btn)

        ax_reset = self.fig.add_axes([0.90, 0.92, 0.07, 0.04])
        self.btn_reset = Button(ax_reset, 'Reset', color='#f0d0d0', hovercolor='#e0b0b0')
        self.btn_reset.on_clicked(self._on_reset)

        # Info text
        self.info_text = self.fig.text(0.02, 0.70, '', fontsize=10, family='monospace',
                                       verticalalignment='top')

        self.fig.canvas.mpl_connect('key_press_event', self._on_key)
        self.fig.canvas.mpl_connect('button_press_event', self._on_press)
        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('button_release_event', self._on_release)

    # -------------------------------------------------------------------------
    # FRAME LOOP
    # -------------------------------------------------------------------------

    def current_inputs(self) -> TickInputs:
        """Sample sliders and latched events for the next tick."""
        return TickInputs(
            mass=float(self.slider_mass.val),
            stiffness=float(self.slider_k.val),
            damping_factor=float(self.slider_damping.val),
            run_toggle=self._pending_toggle,
            reset=self._pending_reset,
            dragging=self._mouse_down,
            pointer_y=self._pointer_y,
            press_at=self._press_at,
        )

    def step_frame(self, frame=None):
        """Advance the simulation one tick and redraw."""
        inputs = self.current_inputs()
        self._pending_toggle = False
        self._pending_reset = False
        self._press_at = None

        outputs = self.context.tick(inputs)
        self._update_all_displays(outputs)
        return []

    def _update_all_displays(self, outputs: TickOutputs):
        ctx = self.context
        physics = self.config.physics
        display = self.config.display
        x = physics.anchor_x

        draw_scene(self.ax_scene, physics, display, ctx.mass_y, ctx.center_y)
        draw_hint(self.ax_scene, x, ctx.mass_y, ctx.hint)
        if not outputs.running:
            draw_stopped_banner(self.ax_scene, display)

        advanced = self.mode == 'Advanced'
        detailed = self.mode in ('Intermediate', 'Advanced')

        if detailed:
            draw_displacement_graph(self.ax_graph, outputs.history,
                                    physics.history_capacity, display.graph_range)
            draw_vectors(self.ax_scene, x, ctx.center_y, outputs.state.velocity,
                         outputs.acceleration, display)
        if advanced:
            draw_energy_chart(self.ax_energy, energy_bars(outputs, display), display)
            draw_displacement_arrow(self.ax_scene, x, ctx.equilibrium_y, ctx.mass_y)

        self.ax_graph.set_visible(detailed)
        self.ax_energy.set_visible(advanced)

        self._update_info(outputs)
        self.fig.canvas.draw_idle()

    def _update_info(self, outputs: TickOutputs):
        p = self.context.params
        info = f"""Mass:    {p.mass:.1f} kg
k:       {p.stiffness:.2f} N/m
Damping: {p.damping_factor:.3f}

Mode: {self.mode}

Press SPACE to start/stop
Drag the weight to set
the initial position

{'[>] RUNNING' if outputs.running else '[||] STOPPED'}"""
        self.info_text.set_text(info)

    # -------------------------------------------------------------------------
    # CALLBACKS
    # -------------------------------------------------------------------------

    def set_mode(self, mode: str):
        if mode not in DISPLAY_MODES:
            raise ValueError(f"Invalid display mode: {mode}. Must be one of {list(DISPLAY_MODES)}")
        self.mode = mode
        logger.debug(f"Display mode: {mode}")
        self._update_all_displays(self.context.outputs())

    def _on_key(self, event):
        if event.key in SPACE_KEYS:
            self._pending_toggle = True

    def _on_press(self, event):
        if event.inaxes is not self.ax_scene or event.xdata is None:
            return
        self._pointer_y = event.ydata
        self._press_at = (event.xdata, event.ydata)
        self._mouse_down = True

    def _on_motion(self, event):
        if event.inaxes is self.ax_scene and event.ydata is not None:
            self._pointer_y = event.ydata

    def _on_release(self, event):
        self._mouse_down = False

    def _on_reset(self, event):
        """Sliders back to defaults; the state reset happens next frame."""
        self.slider_mass.reset()
        self.slider_k.reset()
        self.slider_damping.reset()
        self._pending_reset = True
        self._pending_toggle = False

    def run(self):
        """Start the frame timer and show the window."""
        self.anim = animation.FuncAnimation(
            self.fig, self.step_frame,
            interval=self.config.display.frame_interval,
            blit=False, cache_frame_data=False
        )
        plt.show()


def main(config: Optional[SpringLabConfig] = None, mode: Optional[str] = None):
    explorer = SpringMassExplorer(config)
    if mode is not None:
        explorer.set_mode(mode)
    explorer.run()
    return explorer
