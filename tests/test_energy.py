import numpy as np
import pytest

from springlab.config import PhysicsConfig
from springlab.energy import (
    EnergyAccount,
    EnergyReadout,
    current_energies,
    discrete_invariant,
    heat_delta,
)
from springlab.oscillator import OscillatorParams, OscillatorState, integrate_tick


def test_current_energies_known_values(default_params):
    # sag 30, offset 10 -> 40 px = 1 m past the natural length
    # block top at 50 + 200 + 30 + 10 + 20 = 310 -> 190 px = 4.75 m above the reference
    state = OscillatorState(offset=10.0, velocity=2.0)
    readout = current_energies(state, default_params, sag=30.0, physics=PhysicsConfig())

    assert readout.kinetic == pytest.approx(10.0)
    assert readout.elastic == pytest.approx(0.05)
    assert readout.gravitational == pytest.approx(5 * 9.81 * 4.75)
    assert readout.total == pytest.approx(10.0 + 0.05 + 5 * 9.81 * 4.75)


def test_elastic_energy_is_unscaled(default_params):
    # 80 px = 2 m of stretch: 0.5 * 0.1 * 4
    readout = current_energies(OscillatorState(offset=50.0), default_params, sag=30.0)
    assert readout.elastic == pytest.approx(0.2)


def test_elastic_energy_zero_at_natural_length(default_params):
    readout = current_energies(OscillatorState(offset=-30.0), default_params, sag=30.0)
    assert readout.elastic == 0.0


def test_gravitational_energy_negative_below_reference(default_params):
    readout = current_energies(OscillatorState(offset=250.0), default_params, sag=30.0)
    assert readout.gravitational < 0


def test_heat_delta_from_damping():
    assert heat_delta(-2.0, -1.99, 5.0) == pytest.approx(0.5 * 5.0 * (4.0 - 1.99 ** 2))


def test_heat_delta_never_negative():
    assert heat_delta(1.0, 2.0, 5.0) == 0.0
    assert heat_delta(0.0, 0.0, 5.0) == 0.0


def test_account_lifecycle():
    account = EnergyAccount()
    assert account.reference_total_energy == 0.0
    assert account.cumulative_heat == 0.0

    account.accumulate_heat(2.0, 1.0, 4.0)
    assert account.cumulative_heat == pytest.approx(6.0)

    account.snapshot(EnergyReadout(kinetic=1.0, elastic=2.0, gravitational=3.0))
    assert account.reference_total_energy == pytest.approx(6.0)
    assert account.cumulative_heat == 0.0

    account.accumulate_heat(1.0, 0.5, 2.0)
    account.reset()
    assert account.reference_total_energy == 0.0
    assert account.cumulative_heat == 0.0


def test_undamped_step_conserves_invariant_and_makes_no_heat():
    params = OscillatorParams(mass=5.0, stiffness=0.1, damping_factor=1.0)
    state = OscillatorState(offset=100.0, velocity=0.0)
    account = EnergyAccount()
    h0 = discrete_invariant(state, params)

    naive = []
    for _ in range(5000):
        result = integrate_tick(state, params)
        account.accumulate_heat(result.velocity_before_damping, result.state.velocity, params.mass)
        state = result.state
        assert discrete_invariant(state, params) == pytest.approx(h0, rel=1e-9)
        naive.append(0.5 * params.mass * state.velocity ** 2 + 0.5 * params.stiffness * state.offset ** 2)

    assert account.cumulative_heat == 0.0
    # the textbook energy only wobbles around the invariant
    naive = np.array(naive)
    assert naive.max() < 1.25 * h0
    assert naive.min() > 0.8 * h0


def test_heat_is_monotonic_for_any_parameter_sequence():
    rng = np.random.default_rng(7)
    account = EnergyAccount()
    state = OscillatorState(offset=120.0, velocity=0.0)
    last = 0.0

    for _ in range(3000):
        params = OscillatorParams(
            mass=rng.uniform(5, 15),
            stiffness=rng.uniform(0.05, 0.1),
            # include a few energy-adding factors above 1
            damping_factor=rng.choice([0.9, 0.95, 0.995, 0.999, 1.0, 1.002]),
        )
        result = integrate_tick(state, params)
        account.accumulate_heat(result.velocity_before_damping, result.state.velocity, params.mass)
        state = result.state
        assert account.cumulative_heat >= last
        last = account.cumulative_heat

    assert last > 0


def test_damping_drains_invariant_into_heat():
    params = OscillatorParams(mass=8.0, stiffness=0.07, damping_factor=0.98)
    state = OscillatorState(offset=0.0, velocity=3.0)
    account = EnergyAccount()
    h0 = discrete_invariant(state, params)

    for _ in range(2000):
        result = integrate_tick(state, params)
        account.accumulate_heat(result.velocity_before_damping, result.state.velocity, params.mass)
        state = result.state

    assert discrete_invariant(state, params) < h0
    assert account.cumulative_heat > 0
