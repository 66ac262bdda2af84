import json

import numpy as np
import pytest

from springlab.headless import TRACE_KEYS, plot_run, simulate, summarize
from springlab.oscillator import OscillatorParams


def test_trace_shape_and_start(default_params):
    result = simulate(default_params, initial_offset=100.0, ticks=200)

    for key in TRACE_KEYS:
        assert len(result[key]) == 201
    assert result['tick'][0] == 0
    assert result['offset'][0] == pytest.approx(100.0)
    assert result['velocity'][0] == 0.0
    assert result['offset'][1] == pytest.approx(98.01)
    assert result['heat'][0] == 0.0


def test_reference_energy_is_start_total(default_params):
    result = simulate(default_params, initial_offset=100.0, ticks=50)
    start_total = result['kinetic'][0] + result['elastic'][0] + result['gravitational'][0]
    assert result['reference_total_energy'] == pytest.approx(start_total)


def test_heat_never_decreases(default_params):
    result = simulate(default_params, initial_offset=150.0, ticks=1000)
    assert np.all(np.diff(result['heat']) >= 0)
    assert result['heat'][-1] > 0


def test_initial_offset_clamped_like_a_pointer(default_params):
    result = simulate(default_params, initial_offset=1000.0, ticks=1)
    # drag_max_y 450 - equilibrium 280
    assert result['offset'][0] == pytest.approx(170.0)


def test_record_every(default_params):
    result = simulate(default_params, ticks=100, record_every=10)
    assert list(result['tick']) == [0] + list(range(10, 101, 10))


def test_zero_ticks_never_starts(default_params):
    result = simulate(default_params, ticks=0)
    assert len(result['tick']) == 1
    assert result['reference_total_energy'] == 0.0


@pytest.mark.parametrize('kwargs', [{'ticks': -1}, {'record_every': 0}])
def test_bad_arguments(default_params, kwargs):
    with pytest.raises(ValueError):
        simulate(default_params, **kwargs)


def test_summary_is_json_ready(default_params):
    summary = summarize(simulate(default_params, ticks=300))
    assert summary['ticks'] == 300
    assert summary['max_abs_offset'] == pytest.approx(100.0)
    json.dumps(summary)


def test_plot_run_saves_figure(tmp_path):
    result = simulate(OscillatorParams(mass=8.0, stiffness=0.07, damping_factor=0.99), ticks=120)
    path = tmp_path / 'figures' / 'run.png'
    fig = plot_run(result, save_path=path)
    assert path.exists()
    assert len(fig.axes) == 2
