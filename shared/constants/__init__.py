from .environments import Environment

__all__ = ["Environment"]
