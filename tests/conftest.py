import io

import pytest

from rpncalc.calculator import Calculator
from rpncalc.display import Display


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def err():
    return io.StringIO()


@pytest.fixture
def display(out, err):
    return Display(out, err)


@pytest.fixture
def make_calc(tmp_path, display):
    """Build a Calculator whose configuration directory is tmp_path and
    which never sees the real environment."""
    def make(environ=None, display=display, **settings):
        cfg = {"config_dir": str(tmp_path)}
        cfg.update(settings)
        return Calculator(display, environ=environ or {}, settings=cfg)
    return make


@pytest.fixture
def calc(make_calc):
    return make_calc()
