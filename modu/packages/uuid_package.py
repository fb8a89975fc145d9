import uuid

from modu.types.function import native
from modu.types.object import ModuObject


@native("v4")
def v4(args, env, evaluate_fn):
    return str(uuid.uuid4())


def get_object() -> ModuObject:
    return ModuObject({v4.name: v4})
