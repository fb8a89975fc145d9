from __future__ import annotations

import logging
from pathlib import Path

from modu import EvaluatorFn, ModuValue, SOURCE_EXTENSION
from modu.ast import Import
from modu.errors import ModuError, ModuImportError, ModuRecursionError
from modu.evaluation.context import EvalContext
from modu.modules.source_loader import resolve_source, read_source
from modu.packages import get_package
from modu.reader.lexer import unquote
from modu.reader.parser import parse_program
from modu.types.environment import Environment
from modu.types.null import Null
from modu.types.object import ModuObject

logger = logging.getLogger(__name__)


def import_statement(node: Import, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> ModuValue:
    """
    Usage:
        import "lib.modu"            binds an object named after the file stem
        import "lib.modu" as util    binds an object named util
        import "lib.modu" as *       binds every name the file defined
        import "math"                standard-library packages work the same way
    """
    target = unquote(node.target.raw)

    if target.endswith(SOURCE_EXTENSION):
        members = _load_file(target, env, ctx, evaluate_fn)
        namespace = ModuObject(members)
        default_name = Path(target).stem
    else:
        namespace = get_package(target, ctx.config)
        if namespace is None:
            raise ModuImportError(f"Package {target} not found")
        members = dict(namespace.plain_items())
        default_name = target

    if node.alias == "*":
        env.update(members)
    else:
        env.define(node.alias or default_name, namespace)
    return Null


def _load_file(target: str, env: Environment, ctx: EvalContext, evaluate_fn: EvaluatorFn) -> dict[str, ModuValue]:
    """Run a source file against a clone of `env`; return what it bound."""
    path = resolve_source(target, ctx.config)
    source = read_source(path)
    logger.debug("importing %s", path)

    module_env = env.clone()
    module_ctx = ctx.derive(ctx.config.with_script(path))
    try:
        with module_ctx.frame(path.name, counted=False):
            for statement in parse_program(source):
                evaluate_fn(statement, module_env, module_ctx)
    except ModuRecursionError:
        raise
    except ModuError as err:
        where = f"{path}, line {err.line}" if err.line else str(path)
        raise ModuImportError(f"{err.message} (in {where})") from err

    return module_env.bound_since_creation()
