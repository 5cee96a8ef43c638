from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from hydrim.exception import (
    RequiredFieldMissingError,
    UnresolvableFieldTypeError,
)
from hydrim.reflection import (
    FieldDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    allocate,
    assign,
    describe,
)
from hydrim.registry import TypeRegistry

logger = logging.getLogger(__name__)

ModelType = Union[str, Type[object]]


class Hydrator:
    """
    Turns mappings (and lists of mappings) into instances of a target type
    based on the type's annotated attributes and the parameters of its
    constructor. Instances are allocated without calling `__init__`.

    Subclass and override `resolve_value` to customize how a single field
    value is converted.
    """

    def __init__(
        self,
        *,
        registry: Optional[TypeRegistry] = None,
        cache: bool = False,
    ) -> None:
        """Initializer for a hydrator

        Args:
            registry (TypeRegistry, optional): Registry used to resolve
                types given by name, see `TypeRegistry.create`. Defaults
                to the shared registry.
            cache (bool, optional): Whether to keep type descriptors
                between calls instead of inspecting the type every time.
                Defaults to `False`.
        """
        self._registry = registry
        self._cache: Optional[Dict[type, TypeDescriptor]] = (
            {} if cache else None
        )

    @property
    def registry(self) -> TypeRegistry:
        if self._registry is not None:
            return self._registry
        return TypeRegistry()

    def factory(self, model: ModelType):
        """Create a callable that hydrates `model` from either a single
        record or a list of records

        Args:
            model (Union[str, Type[object]]): The target type

        Returns:
            Callable: The factory
        """

        def factory(
            data: Union[Mapping[str, Any], List[Mapping[str, Any]], None]
        ):
            return self.hydrate(model, data, as_list=isinstance(data, list))

        return factory

    def hydrate(
        self,
        model: ModelType,
        data: Union[Mapping[str, Any], Iterable[Mapping[str, Any]], None],
        as_list: bool = False,
    ):
        """Hydrate a record, or a list of records, into instances of
        `model`

        Example:

        ```python
        @dataclass
        class Point:
            x: int
            y: Optional[int]

        Hydrator().hydrate(Point, {"x": 1})  # Point(x=1, y=None)
        ```

        Args:
            model (Union[str, Type[object]]): The target type, or the name
                of a registered type, or a dotted import path
            data (Union[Mapping[str, Any], Iterable[Mapping[str, Any]]]):
                The input record. May be `None`.
            as_list (bool, optional): Whether each entry of `data` is a
                record to be hydrated on its own. Defaults to `False`.

        Raises:
            TypeNotFoundError: When `model` does not resolve to a type
            RequiredFieldMissingError: When a required field is absent
            UnresolvableFieldTypeError: When a nested record is given for a
                field whose type cannot be determined

        Returns:
            The instance, a list of instances, or `None`
        """
        if data is None:
            return None

        cls = self.registry.resolve(model)
        if as_list:
            records = list(data)
            logger.debug(
                "Hydrating %d records into %s",
                len(records),
                cls.__qualname__,
            )
            return [self.hydrate_single(cls, record) for record in records]
        return self.hydrate_single(cls, data)  # type: ignore

    def hydrate_single(
        self, model: Type[object], record: Mapping[str, Any]
    ) -> Any:
        descriptor = self.describe(model)
        instance = allocate(model)
        for field in descriptor.fields:
            self.assign_field(
                field,
                record,
                instance,
                descriptor.parameters.get(field.name),
                model=descriptor.name,
            )
        return instance

    def assign_field(
        self,
        field: FieldDescriptor,
        record: Mapping[str, Any],
        instance: Any,
        parameter: Optional[ParameterDescriptor],
        model: str = "",
    ) -> None:
        """Resolve the value of one field from the record and set it on the
        instance

        Args:
            field (FieldDescriptor): The field being populated
            record (Mapping[str, Any]): The input record
            instance (Any): The instance being populated
            parameter (ParameterDescriptor, optional): The constructor
                parameter with the same name as the field, if any
            model (str, optional): Name of the type, for error messages

        Raises:
            RequiredFieldMissingError: When the field is absent from the
                record and is neither nullable nor has a default
        """
        name = field.name
        if name in record:
            value = record[name]
        else:
            if parameter is None or not (
                parameter.nullable or parameter.has_default
            ):
                raise RequiredFieldMissingError(
                    name, model or type(instance).__qualname__
                )
            value = parameter.make_default() if parameter.has_default else None

        assign(instance, name, self.resolve_value(field, value, model=model))

    def resolve_value(
        self, field: FieldDescriptor, value: Any, model: str = ""
    ) -> Any:
        """Convert a raw value for a field. Records given for composite
        fields are hydrated recursively, anything else is kept as is.

        Raises:
            UnresolvableFieldTypeError: When the value is a record but the
                field type is composite and cannot be determined
        """
        if field.composite and isinstance(value, Mapping):
            if field.target is None:
                raise UnresolvableFieldTypeError(field.name, model)
            return self.hydrate_single(field.target, value)
        return value

    def describe(self, model: Type[object]) -> TypeDescriptor:
        if self._cache is None:
            return describe(model, self.registry)

        descriptor = self._cache.get(model)
        if descriptor is None:
            descriptor = self._cache[model] = describe(model, self.registry)
        else:
            logger.debug("Using cached descriptor for %s", descriptor.name)
        return descriptor
