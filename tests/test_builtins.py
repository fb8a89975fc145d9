import io

import pytest

from modu import errors
from modu.builtin import register
from modu.config import EvalConfig
from modu.interpreter import run_program


def test_print_concatenates_display_forms(run):
    assert run('print(1, "a", true, 2.5, null)') == "1atrue2.5null\n"


def test_print_with_no_arguments(run):
    assert run("print()") == "\n"


@pytest.mark.parametrize(
    "expr,expected",
    [
        ('int("42")', "42"),
        ('int(" 7 ")', "7"),
        ('int("4.7")', "4"),
        ("int(true)", "1"),
        ("int(false)", "0"),
        ("int(4.7)", "4"),
        ("int(-3)", "-3"),
        ('float("1.5")', "1.5"),
        ("float(2)", "2"),
        ("float(true)", "1"),
        ("str(12)", "12"),
        ("str(true)", "true"),
        ('str("s")', "s"),
    ]
)
def test_conversions(run, expr, expected):
    assert run(f"print({expr})") == expected + "\n"


def test_conversion_kinds(run, env):
    run('let i = int("3")\nlet f = float("3")\nlet s = str(3)')
    assert env["i"] == 3 and isinstance(env["i"], int)
    assert env["f"] == 3.0 and isinstance(env["f"], float)
    assert env["s"] == "3"


@pytest.mark.parametrize(
    "expr,message",
    [
        ('int("abc")', 'Cannot convert "abc" to int'),
        ('int("inf")', 'Cannot convert "inf" to int'),
        ("int({a: 1})", "int() requires a string or boolean"),
        ('float("x")', 'Cannot convert "x" to float'),
        ("float(null)", "float() requires a string, boolean or number"),
    ]
)
def test_conversion_errors(run, expr, message):
    with pytest.raises(errors.ModuTypeError) as excinfo:
        run(f"let v = {expr}")
    assert excinfo.value.message == message


def test_builtin_arity(run):
    with pytest.raises(errors.ModuArityError, match="int takes 1 argument, got 2"):
        run("int(1, 2)")


def test_exit_raises_system_exit(run, out):
    with pytest.raises(SystemExit) as excinfo:
        run('print("bye")\nexit()\nprint("never")')
    assert excinfo.value.code == 0
    assert out.getvalue() == "bye\n"


def test_input_reads_a_stripped_line(run, env, out, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("  modu  \nrest\n"))
    run('let name = input("name? ")\nprint("hi ", name)')
    assert env["name"] == "modu"
    assert out.getvalue() == "name? hi modu\n"


@pytest.mark.parametrize("source,message", [
    ("exit()", "exit() is disabled on the server"),
    ('input("x")', "input() is disabled on the server"),
])
def test_server_mode_disables_host_builtins(env, out, source, message):
    config = EvalConfig(stdout=out, server_mode=True)
    register(env, config)
    with pytest.raises(errors.ModuRuntimeError) as excinfo:
        run_program(source, env, config)
    assert excinfo.value.message == message


@pytest.mark.parametrize("expr", ["str({a: 1})", "str(print)", 'str(int)'])
def test_str_rejects_objects_and_functions(run, expr):
    with pytest.raises(errors.ModuTypeError) as excinfo:
        run(f"let v = {expr}")
    assert excinfo.value.message == "str() requires a string, number or boolean"


def test_str_of_null(run):
    assert run("print(str(missing))") == "null\n"
