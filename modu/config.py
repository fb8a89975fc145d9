from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

DEFAULT_MAX_BODY_STATEMENTS = 100
DEFAULT_MAX_CALL_DEPTH = 64

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 2424


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_import_roots() -> List[Path]:
    """Extra directories searched for `.modu` imports (MODU_PATH)."""
    return paths_from_env('MODU_PATH', [])


def get_server_port() -> int:
    raw = os.environ.get('MODU_SERVER_PORT')
    return int(raw) if raw else DEFAULT_SERVER_PORT


@dataclass(frozen=True)
class EvalConfig:
    """Everything the evaluator would otherwise read from process state.

    - script_path: the file being run; relative imports resolve next to it.
    - server_mode: evaluation serves untrusted input (no file package, no exit).
    - max_body_statements: statements one call frame may execute.
    - max_call_depth: nested user-function calls allowed.
    - propagate_method_return: whether `return` inside an object method
      becomes the value of the method call.
    - stdout: where `print` writes; None means sys.stdout at call time.
    """

    script_path: Optional[Path] = None
    server_mode: bool = False
    max_body_statements: int = DEFAULT_MAX_BODY_STATEMENTS
    max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
    propagate_method_return: bool = True
    stdout: Optional[TextIO] = None

    @classmethod
    def for_script(cls, path: str | Path, **kwargs) -> EvalConfig:
        return cls(script_path=Path(path), **kwargs)

    def with_script(self, path: str | Path) -> EvalConfig:
        return replace(self, script_path=Path(path))

    @property
    def base_dir(self) -> Path:
        if self.script_path is not None:
            return self.script_path.resolve().parent
        return Path.cwd()
