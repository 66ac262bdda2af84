"""
Drawing helpers for the spring-mass scene.

The scene axes uses display pixel coordinates with y growing downward
(xlim 0..width, ylim height..0), so the numbers coming out of the
simulation can be drawn directly. The displacement graph and the energy
chart get their own axes and are redrawn from scratch each frame.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.patches import Circle, FancyArrowPatch, Rectangle

from ..config import DisplayConfig, PhysicsConfig
from ..simulation import TickOutputs


BASE_COLOR = '#696969'
SPRING_COLOR = (180 / 255, 180 / 255, 180 / 255, 200 / 255)
BLOCK_COLOR = '#c8c8c8'
SCENE_BG = '#81b1d6'

HOOK_WIDTH = 10
HOOK_HEIGHT = 20
SPRING_WIDTH = 50
SPRING_HEIGHT_RANGE = (30, 400)
BLOCK_TOP_FLOOR = 100
BASE_Y = 10


def setup_scene_axes(ax, display: DisplayConfig):
    """Pixel-space axes, y down, no ticks."""
    ax.set_xlim(0, display.width)
    ax.set_ylim(display.height, 0)
    ax.set_aspect('equal')
    ax.set_facecolor(SCENE_BG)
    ax.set_xticks([])
    ax.set_yticks([])


def draw_base(ax, x: float, y: float):
    """Fixed block at the top that holds the spring."""
    ax.add_patch(Rectangle((x - 50, y - 10), 100, 20, facecolor=BASE_COLOR,
                           edgecolor='black', linewidth=2))
    ax.add_patch(Rectangle((x - 10, y + 10), 20, 30, facecolor=BASE_COLOR,
                           edgecolor='black', linewidth=2))


def spring_height(anchor_y: float, mass_y: float) -> float:
    lo, hi = SPRING_HEIGHT_RANGE
    return float(np.clip(mass_y - anchor_y, lo, hi))


def draw_spring(ax, anchor_x: float, anchor_y: float, mass_y: float):
    """Spring as a translucent vertical rectangle from the anchor to the hook."""
    height = spring_height(anchor_y, mass_y)
    patch = Rectangle((anchor_x - SPRING_WIDTH / 2, anchor_y), SPRING_WIDTH, height,
                      facecolor=SPRING_COLOR, edgecolor='black', linewidth=2)
    ax.add_patch(patch)
    return patch


def draw_mass(ax, x: float, block_top: float, size: float):
    """Hook and block. The block is never drawn above BLOCK_TOP_FLOOR."""
    top = max(block_top, BLOCK_TOP_FLOOR)
    ax.add_patch(Rectangle((x - HOOK_WIDTH / 2, top - HOOK_HEIGHT), HOOK_WIDTH, HOOK_HEIGHT,
                           facecolor='black', edgecolor='black'))
    block = Rectangle((x - size / 2, top), size, size, facecolor=BLOCK_COLOR,
                      edgecolor='black', linewidth=2)
    ax.add_patch(block)
    return block


def arrow_length(value: float, scale: float, threshold: float) -> Optional[float]:
    """Scaled arrow length, or None when |value| does not exceed the threshold."""
    if abs(value) <= threshold:
        return None
    return value * scale


def _vertical_arrow(ax, x, y, length, color, label):
    arrow = FancyArrowPatch((x, y), (x, y + length), arrowstyle='-|>',
                            mutation_scale=15, color=color, linewidth=3)
    ax.add_patch(arrow)
    ax.text(x + 10, y + length, label, color=color, fontsize=9, va='center')
    return arrow


def draw_vectors(ax, x: float, y: float, velocity: float, accel: float,
                 display: DisplayConfig) -> List:
    """Velocity (blue) and acceleration (red) arrows from the block."""
    arrows = []
    v_len = arrow_length(velocity, display.velocity_arrow_scale, display.velocity_threshold)
    if v_len is not None:
        arrows.append(_vertical_arrow(ax, x, y, v_len, 'blue', 'Velocity'))
    a_len = arrow_length(accel, display.acceleration_arrow_scale, display.acceleration_threshold)
    if a_len is not None:
        arrows.append(_vertical_arrow(ax, x, y, a_len, 'red', 'Acceleration'))
    return arrows


def draw_displacement_arrow(ax, x: float, rest_y: float, mass_y: float):
    """Equilibrium tick mark plus a delta-x bar down to the hook."""
    ax.plot([x + 60, x + 100], [rest_y, rest_y], color='brown', linewidth=2)
    ax.plot([x + 80, x + 80], [rest_y, mass_y], color='purple', linewidth=3)
    ax.text(x + 90, (rest_y + mass_y) / 2, 'Δx', color='purple', fontsize=10)


def draw_displacement_graph(ax, history: Sequence[float], capacity: int, graph_range: float):
    """Displacement vs time over the last `capacity` frames."""
    ax.clear()
    samples = np.asarray(history, dtype=float)
    ax.plot(np.arange(len(samples)), samples, color='blue', linewidth=1)
    ax.axhline(0, color='black', linewidth=0.5)
    ax.set_xlim(0, capacity)
    # positive offset is downward on screen
    ax.set_ylim(graph_range, -graph_range)
    ax.set_yticks(np.linspace(-graph_range, graph_range, 5))
    ax.set_title('Displacement vs Time', fontsize=10)
    ax.set_xlabel('Time (frames)', fontsize=9)
    ax.set_ylabel('Displacement (px)', fontsize=9)
    ax.tick_params(labelsize=8)


def energy_bars(outputs: TickOutputs, display: DisplayConfig) -> List[Tuple[str, float, str]]:
    """
    (label, value, color) for each bar of the energy chart.

    PE(elas) gets the display scale here; the simulation reports it unscaled.
    Total is the unscaled reference snapshot and will not match the sum of
    the component bars.
    """
    e = outputs.energies
    return [
        ('KE', e.kinetic, 'red'),
        ('PE(grav)', e.gravitational, 'blue'),
        ('PE(elas)', e.elastic * display.elastic_display_scale, 'green'),
        ('Heat', outputs.cumulative_heat, 'orange'),
        ('Total', outputs.reference_total_energy, 'purple'),
    ]


def bar_heights(values: Sequence[float], axis_max: float) -> np.ndarray:
    """Bar heights clipped to the chart axis."""
    return np.clip(np.asarray(values, dtype=float), 0.0, axis_max)


def draw_energy_chart(ax, bars: List[Tuple[str, float, str]], display: DisplayConfig):
    ax.clear()
    labels = [b[0] for b in bars]
    heights = bar_heights([b[1] for b in bars], display.energy_axis_max)
    colors = [b[2] for b in bars]

    ax.bar(labels, heights, color=colors, edgecolor='black', linewidth=0.5)
    ax.set_ylim(0, display.energy_axis_max)
    ax.set_yticks(np.arange(0, display.energy_axis_max + 1, display.energy_tick))
    ax.set_title('Energy', fontsize=10)
    ax.text(0.98, 0.98, f"PE(elas) x{display.elastic_display_scale:g}, Total unscaled",
            transform=ax.transAxes, ha='right', va='top', fontsize=7, color='dimgray')
    ax.tick_params(labelsize=8)


def draw_stopped_banner(ax, display: DisplayConfig):
    ax.text(display.width / 2, display.height - 50, 'stopped', ha='center', va='center',
            fontsize=22, color=(200 / 255, 50 / 255, 50 / 255))


def draw_hint(ax, x: float, y: float, hint: int):
    """Green circle at the hook after a missed click, fading with `hint`."""
    if hint <= 0:
        return None
    alpha = min(hint * 2 / 255, 1.0)
    circle = Circle((x, y), 15, facecolor=(0, 200 / 255, 0, alpha), edgecolor='none')
    ax.add_patch(circle)
    return circle


def draw_scene(ax, physics: PhysicsConfig, display: DisplayConfig, mass_y: float, block_top: float):
    """Base, spring and mass at the current state."""
    ax.clear()
    setup_scene_axes(ax, display)
    draw_base(ax, physics.anchor_x, BASE_Y)
    draw_spring(ax, physics.anchor_x, physics.anchor_y, mass_y)
    draw_mass(ax, physics.anchor_x, block_top, physics.block_size)
