"""
Spring-mass visualization for SpringLab.

Usage:
    # Drawing helpers (any matplotlib backend)
    from springlab.visualization.drawing import draw_energy_chart, energy_bars

    # Interactive explorer (launches a matplotlib window)
    from springlab.visualization.spring_explorer import SpringMassExplorer
"""

from .drawing import (
    arrow_length,
    bar_heights,
    draw_displacement_arrow,
    draw_displacement_graph,
    draw_energy_chart,
    draw_hint,
    draw_scene,
    draw_stopped_banner,
    draw_vectors,
    energy_bars,
    spring_height,
)
from .spring_explorer import SpringMassExplorer

__all__ = [
    'arrow_length',
    'bar_heights',
    'draw_displacement_arrow',
    'draw_displacement_graph',
    'draw_energy_chart',
    'draw_hint',
    'draw_scene',
    'draw_stopped_banner',
    'draw_vectors',
    'energy_bars',
    'spring_height',
    'SpringMassExplorer',
]
