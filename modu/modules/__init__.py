from modu.modules.source_loader import resolve_source, read_source

__all__ = ["resolve_source", "read_source"]
