import matplotlib
matplotlib.use('Agg')  # No display in tests

import matplotlib.pyplot as plt
import pytest

from springlab import OscillatorParams, SimulationContext, SpringLabConfig


@pytest.fixture
def config():
    return SpringLabConfig()


@pytest.fixture
def context(config):
    return SimulationContext(config)


@pytest.fixture
def default_params():
    return OscillatorParams(mass=5.0, stiffness=0.1, damping_factor=0.995)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')
