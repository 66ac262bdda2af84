import importlib.util
from pathlib import Path

SCRIPTS = Path(__file__).resolve().parent.parent / 'scripts'


def load_script(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f'{name}.py')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_damping_sweep_saves_figure(tmp_path):
    sweep = load_script('damping_sweep')
    path = sweep.generate_damping_sweep(ticks=60, output_dir=tmp_path)
    assert path.exists()
    assert path.name == 'damping_sweep.png'
