from __future__ import annotations

import logging
from pathlib import Path

from modu.config import EvalConfig, get_import_roots
from modu.errors import ModuImportError

logger = logging.getLogger(__name__)


# Map an import target such as "lib/util.modu" to a file underneath the
# importing script's directory or one of the MODU_PATH roots.

def resolve_source(target: str, config: EvalConfig) -> Path:
    rel = Path(target)
    if rel.is_absolute():
        return rel
    roots = [config.base_dir, *get_import_roots()]
    for root in roots:
        candidate = root / rel
        if candidate.is_file():
            logger.debug("resolved import %s -> %s", target, candidate)
            return candidate
    # Not found anywhere: hand back the primary location so that reading it
    # reports the operating system's own error.
    return roots[0] / rel


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as err:
        raise ModuImportError(str(err)) from err
    except UnicodeDecodeError as err:
        raise ModuImportError(f"{path}: {err.reason}") from err
