from importlib.metadata import version

from .base.hydrator import Hydrator
from .decorator import register
from .exception import (
    HydrimError,
    RequiredFieldMissingError,
    TypeNotFoundError,
    UnresolvableFieldTypeError,
)
from .registry import TypeRegistry

__version__ = version("hydrim")

__all__ = (
    "register",
    "Hydrator",
    "HydrimError",
    "RequiredFieldMissingError",
    "TypeNotFoundError",
    "TypeRegistry",
    "UnresolvableFieldTypeError",
)
