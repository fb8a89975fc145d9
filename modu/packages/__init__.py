"""Standard-library packages reachable through `import "<name>"`."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from modu.config import EvalConfig
from modu.types.object import ModuObject
from modu.packages import (
    array_package,
    ffi_package,
    file_package,
    json_package,
    math_package,
    os_package,
    time_package,
    uuid_package,
)

logger = logging.getLogger(__name__)

PACKAGES: dict[str, Callable[[], ModuObject]] = {
    "math": math_package.get_object,
    "file": file_package.get_object,
    "os": os_package.get_object,
    "time": time_package.get_object,
    "json": json_package.get_object,
    "array": array_package.get_object,
    "uuid": uuid_package.get_object,
    "ffi": ffi_package.get_object,
}

# Packages that would let untrusted input touch the host's files.
SERVER_REFUSED = frozenset({"file"})


def get_package(name: str, config: Optional[EvalConfig] = None) -> Optional[ModuObject]:
    """Build a fresh namespace object for `name`, or None when unknown."""
    factory = PACKAGES.get(name)
    if factory is None:
        return None
    if config is not None and config.server_mode and name in SERVER_REFUSED:
        logger.debug("package %s refused in server mode", name)
        return None
    return factory()


__all__ = ["PACKAGES", "get_package"]
