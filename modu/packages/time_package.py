"""The `time` package: Unix timestamps and their local renderings."""

import time
from datetime import datetime

from modu import ModuValue
from modu.errors import ModuRuntimeError, ModuTypeError
from modu.types.function import native, evaluate_args
from modu.types.object import ModuObject


def _local_time(value: ModuValue, fn_name: str) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ModuTypeError(f"{fn_name}() expects a number")
    try:
        return datetime.fromtimestamp(int(value)).astimezone()
    except (OverflowError, OSError, ValueError) as err:
        raise ModuRuntimeError(f"{fn_name}() got an invalid timestamp: {err}") from err


@native("now")
def now(args, env, evaluate_fn):
    return int(time.time())


@native("to_iso_8601", "unix")
def to_iso_8601(args, env, evaluate_fn):
    (unix,) = evaluate_args(args, env, evaluate_fn)
    return _local_time(unix, "to_iso_8601").isoformat()


@native("to_local_date_time", "unix")
def to_local_date_time(args, env, evaluate_fn):
    (unix,) = evaluate_args(args, env, evaluate_fn)
    return _local_time(unix, "to_local_date_time").strftime("%c")


def get_object() -> ModuObject:
    return ModuObject({fn.name: fn for fn in (now, to_iso_8601, to_local_date_time)})
