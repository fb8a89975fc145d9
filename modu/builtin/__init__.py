from modu.builtin.env_builtin import register

__all__ = ["register"]
