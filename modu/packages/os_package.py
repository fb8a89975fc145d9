"""The `os` package: run a shell command and capture what it prints."""

import logging
import subprocess

from modu.errors import ModuRuntimeError, ModuTypeError
from modu.types.function import native, evaluate_args
from modu.types.object import ModuObject

logger = logging.getLogger(__name__)


@native("exec", "command")
def exec_(args, env, evaluate_fn):
    """Run `command` with `sh -c`; return its trimmed stdout.

    A non-zero exit status becomes an error carrying the trimmed stderr.
    """
    (command,) = evaluate_args(args, env, evaluate_fn)
    if not isinstance(command, str):
        raise ModuTypeError("os.exec argument must be a string")

    logger.debug("exec: %s", command)
    try:
        result = subprocess.run(["sh", "-c", command], capture_output=True, text=True)
    except OSError as err:
        raise ModuRuntimeError(f"Command execution failed: {err}") from err

    if result.returncode != 0:
        raise ModuRuntimeError(result.stderr.strip() or f"Command exited with status {result.returncode}")
    return result.stdout.strip()


def get_object() -> ModuObject:
    return ModuObject({exec_.name: exec_})
