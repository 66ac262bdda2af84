"""
Configuration records for SpringLab.

All constants of the simulation live here: the pixel/meter scale, the
scene geometry the physics is expressed against, the slider ranges and the
display constants used by the drawing code.

Configs can be loaded from a JSON file with optional ``physics``,
``sliders`` and ``display`` sections:

    {
        "physics": {"sim_gravity": 0.8},
        "sliders": {"mass": {"min": 5, "max": 20, "init": 5, "step": 0.1}},
        "display": {"fps": 30}
    }
"""

import json
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Dict, Optional, Union

from .oscillator import OscillatorParams


DISPLAY_MODES = ('Beginner', 'Intermediate', 'Advanced')


@dataclass(frozen=True)
class PhysicsConfig:
    """Scales and scene geometry the core computes against."""
    pixels_per_meter: float = 40.0
    gravity: float = 9.81            # m/s^2, used for PE(grav)
    sim_gravity: float = 0.6         # static sag per unit mass, pixel units
    min_stiffness: float = 1e-4      # floor before dividing by k
    max_sag: float = 350.0

    # Scene geometry (display pixels, y grows downward)
    anchor_x: float = 350.0
    anchor_y: float = 50.0
    rest_length: float = 200.0
    block_size: float = 40.0
    drag_top_margin: float = 40.0
    drag_max_y: float = 450.0
    pe_reference_y: float = 500.0

    history_capacity: int = 300


@dataclass(frozen=True)
class SliderRange:
    """Range, default and step of one slider."""
    min: float
    max: float
    init: float
    step: float


@dataclass(frozen=True)
class SliderConfig:
    mass: SliderRange = SliderRange(5.0, 15.0, 5.0, 0.1)
    stiffness: SliderRange = SliderRange(0.05, 0.1, 0.1, 0.01)
    damping: SliderRange = SliderRange(0.9, 0.999, 0.995, 0.001)


@dataclass(frozen=True)
class DisplayConfig:
    """Presentation constants. None of these feed back into the physics."""
    width: int = 700
    height: int = 600
    fps: int = 60

    # PE(elas) is tiny next to KE/PE(grav); scaled on the chart only
    elastic_display_scale: float = 200.0
    energy_axis_max: float = 3000.0
    energy_tick: float = 250.0

    velocity_arrow_scale: float = 10.0
    acceleration_arrow_scale: float = 100.0
    velocity_threshold: float = 0.25
    acceleration_threshold: float = 0.05

    graph_range: float = 200.0
    hint_frames: int = 120
    mode: str = 'Beginner'

    @property
    def frame_interval(self) -> float:
        """Milliseconds between animation frames."""
        return 1000.0 / self.fps


def _build(cls, data: Dict, section: str):
    """Construct a dataclass from a dict, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ValueError(f"Section '{section}' must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")
    return cls(**data)


@dataclass(frozen=True)
class SpringLabConfig:
    """Complete configuration: physics, sliders and display."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    sliders: SliderConfig = field(default_factory=SliderConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check internal consistency.

        Raises:
            ValueError: on empty slider ranges, defaults outside their range,
                non-positive scales or capacities, or an unknown display mode.
        """
        for name in ('mass', 'stiffness', 'damping'):
            rng = getattr(self.sliders, name)
            if rng.min >= rng.max:
                raise ValueError(f"Slider '{name}': min {rng.min} must be below max {rng.max}")
            if not rng.min <= rng.init <= rng.max:
                raise ValueError(
                    f"Slider '{name}': default {rng.init} outside [{rng.min}, {rng.max}]"
                )
            if rng.step <= 0:
                raise ValueError(f"Slider '{name}': step must be positive, got {rng.step}")

        p = self.physics
        if p.pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be positive, got {p.pixels_per_meter}")
        if p.min_stiffness <= 0:
            raise ValueError(f"min_stiffness must be positive, got {p.min_stiffness}")
        if p.history_capacity <= 0:
            raise ValueError(f"history_capacity must be positive, got {p.history_capacity}")
        if p.anchor_y + p.drag_top_margin >= p.drag_max_y:
            raise ValueError("Drag range is empty: anchor_y + drag_top_margin >= drag_max_y")

        if self.display.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.display.fps}")
        if self.display.mode not in DISPLAY_MODES:
            raise ValueError(
                f"Invalid display mode: {self.display.mode}. Must be one of {list(DISPLAY_MODES)}"
            )

    def default_params(self) -> OscillatorParams:
        """Slider defaults as oscillator parameters."""
        return OscillatorParams(
            mass=self.sliders.mass.init,
            stiffness=self.sliders.stiffness.init,
            damping_factor=self.sliders.damping.init,
        )

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'SpringLabConfig':
        """
        Build a config from a (possibly partial) dict.

        Missing sections and keys fall back to defaults.
        """
        data = data or {}
        unknown = set(data) - {'physics', 'sliders', 'display'}
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")

        physics = _build(PhysicsConfig, data.get('physics', {}), 'physics')

        slider_data = data.get('sliders', {})
        if not isinstance(slider_data, dict):
            raise ValueError("Section 'sliders' must be an object")
        defaults = SliderConfig()
        slider_kwargs = {}
        for name, rng in slider_data.items():
            if not hasattr(defaults, name):
                raise ValueError(f"Unknown slider: {name}")
            if not isinstance(rng, dict):
                raise ValueError(f"Slider '{name}' must be an object")
            merged = {**asdict(getattr(defaults, name)), **rng}
            slider_kwargs[name] = _build(SliderRange, merged, f'sliders.{name}')
        sliders = SliderConfig(**slider_kwargs)

        display = _build(DisplayConfig, data.get('display', {}), 'display')
        return cls(physics=physics, sliders=sliders, display=display)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'SpringLabConfig':
        with open(path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
        return cls.from_dict(data)

    def save(self, path: Union[str, Path]):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
