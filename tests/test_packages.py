import ctypes.util
import time
import uuid

import pytest
from hypothesis import given, strategies as st

from modu import errors
from modu.packages import PACKAGES, get_package
from modu.packages.json_package import from_python, to_python
from modu.types.object import ModuObject


def test_every_package_builds():
    for name in PACKAGES:
        assert isinstance(get_package(name), ModuObject)
    assert get_package("nope") is None


# -----------------------------------------------------
# math
# -----------------------------------------------------

@pytest.mark.parametrize(
    "expr,expected",
    [
        ("math.div(6, 3)", "2"),
        ("math.div(7, 2)", "3.5"),
        ("math.div(7.5, 2.5)", "3"),
        ("math.abs(-3)", "3"),
        ("math.pow(2, 10)", "1024"),
        ("math.pow(2, -1)", "0.5"),
        ("math.pow(-2, 63)", "-9223372036854775808"),
        ("math.pow(1, 9223372036854775807)", "1"),
        ("math.sqrt(16)", "4"),
        ("math.floor(2.7)", "2"),
        ("math.ceil(2.1)", "3"),
        ("math.round(2.5)", "2"),
        ("math.max(1, 5, 3)", "5"),
        ("math.min(4, -2.5)", "-2.5"),
        ("math.PI", "3.141592653589793"),
    ]
)
def test_math(run, expr, expected):
    assert run(f'import "math"\nprint({expr})') == expected + "\n"


@pytest.mark.parametrize(
    "expr,message",
    [
        ("math.div(1, 0)", "cannot divide by zero"),
        ('math.div("a", 1)', "div requires 2 numbers"),
        ("math.sqrt(-1)", "sqrt() of a negative number"),
        ("math.max()", "max() requires at least one number"),
        ("math.pow(2, 63)", "Integer overflow"),
        ("math.pow(2, 9223372036854775807)", "Integer overflow"),
        ("math.div(-9223372036854775807 - 1, -1)", "Integer overflow"),
        ("math.abs(-9223372036854775807 - 1)", "Integer overflow"),
    ]
)
def test_math_errors(run, expr, message):
    with pytest.raises(errors.ModuError) as excinfo:
        run(f'import "math"\nprint({expr})')
    assert excinfo.value.message == message
    assert excinfo.value.line == 2


def test_math_random_in_unit_interval(run, env):
    run('import "math"\nlet r = math.random()')
    assert 0 <= env["r"] < 1


# -----------------------------------------------------
# array
# -----------------------------------------------------

def test_array_operations(run):
    source = """
import "array"
let a = array.new()
array.push(a, 1)
array.push(a, "two")
array.unshift(a, 0)
print(a)
print(array.shift(a))
print(array.pop(a))
print(a.length)
print(array.at(a, 0))
"""
    assert run(source) == '[0, 1, "two"]\n0\ntwo\n1\n1\n'


@pytest.mark.parametrize(
    "source,message",
    [
        ("array.pop(array.new())", "empty array"),
        ("array.shift(array.new())", "empty array"),
        ("array.at(array.new(), 0)", "no such element at that index"),
        ('array.push(1, 2)', "push() expects an array"),
        ('array.pop({length: "x"})', "corrupted array"),
    ]
)
def test_array_errors(run, source, message):
    with pytest.raises(errors.ModuError) as excinfo:
        run(f'import "array"\n{source}')
    assert excinfo.value.message == message


@given(st.lists(st.one_of(
    st.tuples(st.just("push"), st.integers()),
    st.tuples(st.just("unshift"), st.integers()),
    st.tuples(st.just("pop"), st.none()),
    st.tuples(st.just("shift"), st.none()),
)))
def test_array_keeps_length_and_contiguous_indices(ops):
    arr = ModuObject.new_array()
    model = []
    for op, value in ops:
        if op == "push":
            arr.push(value)
            model.append(value)
        elif op == "unshift":
            arr.unshift(value)
            model.insert(0, value)
        elif not model:
            continue
        elif op == "pop":
            assert arr.pop() == model.pop()
        else:
            assert arr.shift() == model.pop(0)
    assert arr.length == len(model)
    assert arr.elements() == model
    assert set(arr.keys()) == {"length"} | {str(i) for i in range(len(model))}


# -----------------------------------------------------
# json
# -----------------------------------------------------

def test_json_round_trip(run):
    source = """
import "json"
let o = json.new()
o.set("name", "modu")
o.set("n", 2)
let s = json.stringify(o)
print(s)
let p = json.parse(s)
print(p.name)
print(p)
"""
    assert run(source) == '{"name":"modu","n":2}\nmodu\n{"name": "modu", "n": 2}\n'


def test_stored_objects_are_copies(run):
    source = """
import "array"
import "json"
let item = array.new()
let list = array.new()
array.push(list, item)
let o = json.new()
o.set("item", item)
array.push(item, 1)
print(list, " ", o)
"""
    assert run(source) == '[[]] {"item": []}\n'


def test_json_set_returns_the_object(run, env):
    env.define("text", '{"a": [1, 2.5, null, {"b": true}]}')
    source = """
import "json"
let o = json.parse(text)
print(o.set("c", "d"))
"""
    assert run(source) == '{"a": [1, 2.5, null, {"b": true}], "c": "d"}\n'


@pytest.mark.parametrize(
    "source,message",
    [
        ('json.parse("{nope")', "Invalid JSON"),
        ("json.parse(1)", "json.parse argument must be a string"),
        ("json.stringify(1)", "json.stringify argument must be an object"),
        ('json.new().set(1, 2)', "json.set key must be a string"),
    ]
)
def test_json_errors(run, source, message):
    with pytest.raises(errors.ModuError) as excinfo:
        run(f'import "json"\n{source}')
    assert message in excinfo.value.message


# "set" is the injected method key and never encodes.
json_keys = st.text(max_size=5).filter(lambda k: k != "set")
json_values = st.recursive(
    st.none() | st.booleans() | st.integers(min_value=-2 ** 63, max_value=2 ** 63 - 1) | st.text(max_size=8),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(json_keys, children, max_size=4),
    max_leaves=10,
)


@given(st.dictionaries(json_keys, json_values, max_size=5))
def test_json_conversion_preserves_data(data):
    obj = from_python(data)
    assert "set" in obj.methods
    assert to_python(obj) == data


# -----------------------------------------------------
# file, os, time, uuid, ffi
# -----------------------------------------------------

def test_file_package(run, tmp_path):
    path = tmp_path / "notes.txt"
    source = f"""
import "file"
file.write("{path}", "hello")
file.write_append("{path}", " world")
print(file.read("{path}"))
"""
    assert run(source) == "hello world\n"
    assert path.read_text(encoding="utf-8") == "hello world"


def test_file_read_missing(run, tmp_path):
    with pytest.raises(errors.ModuRuntimeError, match="No such file or directory"):
        run(f'import "file"\nfile.read("{tmp_path / "missing.txt"}")')


def test_os_exec(run):
    assert run('import "os"\nprint(os.exec("echo hi"))') == "hi\n"


def test_os_exec_failure_reports_stderr(run):
    with pytest.raises(errors.ModuRuntimeError) as excinfo:
        run('import "os"\nos.exec("echo oops 1>&2; exit 3")')
    assert excinfo.value.message == "oops"


def test_time_package(run, env):
    run('import "time"\nlet t = time.now()\nlet iso = time.to_iso_8601(0)\nlet local = time.to_local_date_time(t)')
    assert abs(env["t"] - time.time()) < 5
    assert env["iso"].startswith("19")
    assert isinstance(env["local"], str) and env["local"]


def test_uuid_v4(run, env):
    run('import "uuid"\nlet id = uuid.v4()')
    assert uuid.UUID(env["id"]).version == 4


def test_ffi_missing_library(run, tmp_path):
    with pytest.raises(errors.ModuRuntimeError, match="Failed to load library"):
        run(f'import "ffi"\nffi.call("{tmp_path / "libnope.so"}", "f")')


def test_ffi_requires_library_and_function(run):
    with pytest.raises(errors.ModuTypeError, match="at least 2 arguments"):
        run('import "ffi"\nffi.call("only-one")')


@pytest.mark.skipif(ctypes.util.find_library("c") is None, reason="no C library to load")
def test_ffi_call_returns_small_ints_as_numbers(run, env):
    libc = ctypes.util.find_library("c")
    # abs(int) sees argc, the number of string arguments passed.
    run(f'import "ffi"\nlet n = ffi.call("{libc}", "abs", "a", "b")')
    assert env["n"] == 2
