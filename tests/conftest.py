import io

import pytest

from modu.builtin.env_builtin import register
from modu.config import EvalConfig
from modu.interpreter import run_program
from modu.types.environment import Environment

# Every test gets a fresh environment seeded with the builtins. `print`
# writes into the `out` buffer, so a test can assert on exactly what a
# program printed.


@pytest.fixture
def out():
    with io.StringIO() as buffer:
        yield buffer


@pytest.fixture
def config(out):
    return EvalConfig(stdout=out)


@pytest.fixture
def env(config):
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e, config)
    return e


@pytest.fixture
def run(env, config, out):
    """Run a program against `env`; return everything printed so far."""
    def _run(source: str, cfg: EvalConfig | None = None) -> str:
        run_program(source, env, cfg or config)
        return out.getvalue()
    return _run
