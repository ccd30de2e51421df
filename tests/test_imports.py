import importlib

import pytest

import quantitykit

MODULES = [
    "quantitykit.core",
    "quantitykit.core.errors",
    "quantitykit.core.config",
    "quantitykit.core.numbers",
    "quantitykit.core.promotion",
    "quantitykit.core.inverter",
    "quantitykit.core.units",
    "quantitykit.core.measurement",
    "quantitykit.core.formatting",
    "quantitykit.core.leapseconds",
    "quantitykit.core.timescales",
    "quantitykit.core.catalog",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name):
    module = importlib.import_module(name)
    for exported in getattr(module, "__all__", []):
        assert hasattr(module, exported), f"{name} lists missing name {exported}"


def test_version_info():
    info = quantitykit.VERSION_INFO
    assert f"{info['major']}.{info['minor']}.{info['patch']}" == quantitykit.__version__
