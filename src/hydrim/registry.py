from __future__ import annotations

from importlib import import_module
from inspect import isclass
from typing import Type, Union

from hydrim.exception import TypeNotFoundError


class TypeRegistry(dict):
    """
    Registry of hydratable types, keyed by both their short name and their
    fully qualified name. Lets callers (and string annotations) refer to a
    type by name instead of importing it.
    """

    _singleton = None

    def __new__(cls, *args, **kwargs):
        if cls._singleton is None:
            cls.reset()
        return cls._singleton

    def register(self, model: Type[object]) -> None:
        if not isclass(model):
            raise TypeError(f"Cannot register {model!r}, expected a class")
        self[model.__name__] = model
        self[f"{model.__module__}.{model.__qualname__}"] = model

    def resolve(self, model: Union[str, Type[object]]) -> Type[object]:
        """Resolve a type identifier to a class

        Args:
            model (Union[str, Type[object]]): A class, the name of a
                registered class, or a dotted import path such as
                `"package.module.Class"`

        Raises:
            TypeNotFoundError: When the identifier does not lead to a class

        Returns:
            Type[object]: The class
        """
        if isclass(model):
            return model
        if not isinstance(model, str) or not model:
            raise TypeNotFoundError(model)

        found = self.get(model)
        if found is None:
            found = self._import(model)
        if not isclass(found):
            raise TypeNotFoundError(model)
        return found

    @staticmethod
    def _import(path: str):
        module_name, _, attr = path.rpartition(".")
        if not module_name:
            return None
        try:
            module = import_module(module_name)
        except ImportError:
            return None
        return getattr(module, attr, None)

    @classmethod
    def create(cls) -> TypeRegistry:
        """Create a registry that is separate from the shared one"""
        return super().__new__(cls)  # type: ignore

    @classmethod
    def reset(cls):
        cls._singleton = super().__new__(cls)  # type: ignore
