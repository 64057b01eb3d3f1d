
import importlib
import pytest

@pytest.mark.parametrize("module", [
    "mrkmeans",
    "mrkmeans.algorithms",
    "mrkmeans.assignments",
    "mrkmeans.base",
    "mrkmeans.geometry",
    "mrkmeans.initialization",
    "mrkmeans.tree",
    "mrkmeans.utils",
    "mrkmeans.visualization",
    "mrkmeans.io",
    "mrkmeans.__main__",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None
