from __future__ import annotations

import sys
from collections import abc
from dataclasses import MISSING, InitVar, dataclass
from dataclasses import fields as dataclass_fields
from dataclasses import is_dataclass
from inspect import (
    Parameter,
    get_annotations,
    isabstract,
    isclass,
    isfunction,
    signature,
)
from types import MappingProxyType, SimpleNamespace, UnionType
from typing import (
    Annotated,
    Any,
    Callable,
    ClassVar,
    Dict,
    ForwardRef,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

NoneType = type(None)
UNION_TYPES = (Union, UnionType)
HINT_ERRORS = (
    NameError,
    AttributeError,
    TypeError,
    SyntaxError,
    ValueError,
)
CLASSVAR_PREFIXES = (
    "ClassVar",
    "typing.ClassVar",
    "InitVar",
    "dataclasses.InitVar",
)


class _Unresolved:
    def __repr__(self) -> str:
        return "<unresolved>"


UNRESOLVED: Any = _Unresolved()


@dataclass(frozen=True)
class ParameterDescriptor:
    """Metadata of a single constructor parameter. The constructor itself
    is never called, its parameters only tell which fields may be absent
    from the input and what they fall back to."""

    name: str
    nullable: bool
    has_default: bool
    default: Any = None
    factory: Optional[Callable[[], Any]] = None

    def make_default(self) -> Any:
        if self.factory is not None:
            return self.factory()
        return self.default


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    annotation: Any
    builtin: bool
    target: Optional[Type[object]] = None

    @property
    def composite(self) -> bool:
        return not self.builtin


@dataclass(frozen=True)
class TypeDescriptor:
    model: Type[object]
    fields: Tuple[FieldDescriptor, ...]
    parameters: Mapping[str, ParameterDescriptor]

    @property
    def name(self) -> str:
        return self.model.__qualname__


def describe(
    model: Type[object], namespace: Optional[Mapping[str, Any]] = None
) -> TypeDescriptor:
    """Build the descriptor of a type from its static declaration

    Args:
        model (Type[object]): The class to inspect
        namespace (Mapping[str, Any], optional): Extra names used to
            resolve string annotations that the declaring module does not
            know about. Usually the type registry. Defaults to `None`.

    Returns:
        TypeDescriptor: The public fields, in declaration order, and the
            parameters of the class constructor
    """
    namespace = namespace or {}
    annotations, owners = _public_annotations(model)
    hints = _field_hints(model, annotations, owners, namespace)

    descriptors = []
    for name, annotation in annotations.items():
        hint = hints[name]
        if _is_classvar(hint):
            continue
        builtin, target = _classify(hint, owners[name], namespace)
        descriptors.append(
            FieldDescriptor(name, annotation, builtin, target)
        )

    return TypeDescriptor(
        model=model,
        fields=tuple(descriptors),
        parameters=MappingProxyType(_parameters(model, namespace)),
    )


def allocate(model: Type[object]) -> Any:
    """Create a bare instance without running `__init__`, or any `__new__`
    written in Python along the MRO. The first native `__new__` found
    (`object.__new__` for plain classes) does the allocation."""
    for base in model.__mro__:
        new = base.__dict__.get("__new__")
        if isinstance(new, staticmethod):
            new = new.__func__
        if new is None or isfunction(new):
            continue
        return new(model)
    return object.__new__(model)


def assign(instance: Any, name: str, value: Any) -> None:
    """Set an attribute directly, skipping any `__setattr__` override
    (frozen dataclasses included)"""
    object.__setattr__(instance, name, value)


def _own_annotations(owner: type) -> Dict[str, Any]:
    try:
        return dict(get_annotations(owner))
    except NameError:
        # Lazily evaluated annotations referencing names not defined yet
        import annotationlib

        return dict(
            annotationlib.get_annotations(
                owner, format=annotationlib.Format.FORWARDREF
            )
        )


def _public_annotations(
    model: type,
) -> Tuple[Dict[str, Any], Dict[str, type]]:
    annotations: Dict[str, Any] = {}
    owners: Dict[str, type] = {}
    for owner in reversed(model.__mro__):
        if owner is object:
            continue
        for name, annotation in _own_annotations(owner).items():
            if name.startswith("_"):
                continue
            if isinstance(annotation, str) and annotation.startswith(
                CLASSVAR_PREFIXES
            ):
                continue
            annotations[name] = annotation
            owners[name] = owner
    return annotations, owners


def _field_hints(
    model: type,
    annotations: Dict[str, Any],
    owners: Dict[str, type],
    namespace: Mapping[str, Any],
) -> Dict[str, Any]:
    hints = _type_hints(model, namespace)
    return {
        name: hints[name]
        if name in hints
        else _evaluate(annotation, owners[name], namespace)
        for name, annotation in annotations.items()
    }


def _type_hints(obj: Any, namespace: Mapping[str, Any]) -> Dict[str, Any]:
    """`get_type_hints` against the declaring module, then with registered
    names as locals. Empty when some annotation stays unresolvable."""
    for localns in (None, dict(namespace)):
        try:
            return get_type_hints(obj, localns=localns)
        except HINT_ERRORS:
            continue
    return {}


def _evaluate(annotation: Any, owner: Any, namespace: Mapping[str, Any]):
    """Resolve a single annotation against the attributes of the declaring
    class, then its module, then registered names"""
    if isinstance(annotation, str):
        annotation = ForwardRef(annotation)
    if not isinstance(annotation, ForwardRef):
        return annotation

    module = sys.modules.get(getattr(owner, "__module__", ""))
    globalns = dict(namespace)
    if module is not None:
        globalns.update(vars(module))
    localns = dict(vars(owner)) if isclass(owner) else None
    holder = SimpleNamespace(__annotations__={"value": annotation})
    try:
        value = get_type_hints(holder, globalns=globalns, localns=localns)[
            "value"
        ]
    except HINT_ERRORS:
        return UNRESOLVED
    if isinstance(value, (str, ForwardRef)):
        return UNRESOLVED
    return value


def _is_classvar(hint: Any) -> bool:
    return (
        hint is ClassVar
        or get_origin(hint) is ClassVar
        or isinstance(hint, InitVar)
        or hint is InitVar
    )


def _classify(
    hint: Any, owner: type, namespace: Mapping[str, Any]
) -> Tuple[bool, Optional[type]]:
    """Return `(builtin, target)` for a declared type. A composite
    declaration without a single concrete class has `target=None`."""
    if isinstance(hint, (str, ForwardRef)):
        hint = _evaluate(hint, owner, namespace)
    if hint is UNRESOLVED or isinstance(hint, TypeVar):
        return False, None
    if hint in (Parameter.empty, Any, None, NoneType):
        return True, None

    origin = get_origin(hint)
    if origin is Annotated:
        return _classify(get_args(hint)[0], owner, namespace)
    if origin in UNION_TYPES:
        members = [arg for arg in get_args(hint) if arg is not NoneType]
        classified = [_classify(arg, owner, namespace) for arg in members]
        if len(classified) == 1:
            return classified[0]
        if all(builtin for builtin, _ in classified):
            return True, None
        return False, None
    if origin is not None:
        return True, None

    if isclass(hint):
        if (
            hint.__module__ == "builtins"
            or isabstract(hint)
            or issubclass(hint, (abc.Mapping, abc.Iterable))
        ):
            return True, None
        return False, hint
    return True, None


def _parameters(
    model: type, namespace: Mapping[str, Any]
) -> Dict[str, ParameterDescriptor]:
    init = getattr(model, "__init__", object.__init__)
    if init is object.__init__:
        return {}
    try:
        parameters = list(signature(init).parameters.values())[1:]
    except (TypeError, ValueError, NameError):
        return {}
    hints = _type_hints(init, namespace)

    lookup = {}
    factories = _default_factories(model)
    for parameter in parameters:
        if parameter.kind in (
            Parameter.VAR_POSITIONAL,
            Parameter.VAR_KEYWORD,
        ):
            continue
        annotation = hints.get(parameter.name, parameter.annotation)
        has_default = parameter.default is not Parameter.empty
        lookup[parameter.name] = ParameterDescriptor(
            name=parameter.name,
            nullable=_allows_none(annotation, model, namespace),
            has_default=has_default,
            default=parameter.default if has_default else None,
            factory=factories.get(parameter.name),
        )
    return lookup


def _default_factories(model: type) -> Dict[str, Callable[[], Any]]:
    if not is_dataclass(model):
        return {}
    return {
        field.name: field.default_factory
        for field in dataclass_fields(model)
        if field.init and field.default_factory is not MISSING
    }


def _allows_none(
    annotation: Any, owner: type, namespace: Mapping[str, Any]
) -> bool:
    if isinstance(annotation, (str, ForwardRef)):
        resolved = _evaluate(annotation, owner, namespace)
        if resolved is UNRESOLVED:
            text = getattr(annotation, "__forward_arg__", annotation)
            return "Optional[" in text or any(
                part.strip() == "None" for part in text.split("|")
            )
        annotation = resolved
    if annotation in (Parameter.empty, Any, None, NoneType):
        return True

    origin = get_origin(annotation)
    if origin is Annotated:
        return _allows_none(get_args(annotation)[0], owner, namespace)
    if origin in UNION_TYPES:
        return any(
            arg is NoneType or _allows_none(arg, owner, namespace)
            for arg in get_args(annotation)
        )
    return False
