from .hydrator import Hydrator

__all__ = ("Hydrator",)
