from . import alive, connections

__all__ = ["alive", "connections"]
