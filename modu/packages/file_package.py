"""The `file` package: whole-file reads and writes (UTF-8)."""

from pathlib import Path

from modu import ModuValue
from modu.errors import ModuRuntimeError, ModuTypeError
from modu.printer import to_display
from modu.types.function import native, evaluate_args
from modu.types.null import Null
from modu.types.object import ModuObject


def _path(value: ModuValue, fn_name: str) -> Path:
    if not isinstance(value, str):
        raise ModuTypeError(f"file.{fn_name} path must be a string")
    return Path(value)


@native("read", "path")
def read(args, env, evaluate_fn):
    (path,) = evaluate_args(args, env, evaluate_fn)
    try:
        return _path(path, "read").read_text(encoding="utf-8")
    except OSError as err:
        raise ModuRuntimeError(str(err)) from err


def _write(path: Path, content: ModuValue, mode: str) -> None:
    try:
        with path.open(mode, encoding="utf-8") as f:
            f.write(to_display(content))
    except OSError as err:
        raise ModuRuntimeError(str(err)) from err


@native("write", "path", "content")
def write(args, env, evaluate_fn):
    path, content = evaluate_args(args, env, evaluate_fn)
    _write(_path(path, "write"), content, "w")
    return Null


@native("write_append", "path", "content")
def write_append(args, env, evaluate_fn):
    path, content = evaluate_args(args, env, evaluate_fn)
    _write(_path(path, "write_append"), content, "a")
    return Null


def get_object() -> ModuObject:
    return ModuObject({fn.name: fn for fn in (read, write, write_append)})
