from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union


@dataclass
class Point:
    x: int
    y: int


@dataclass
class OptionalPoint:
    x: int
    y: Optional[int]


@dataclass
class DefaultPoint:
    x: int
    y: int = 5


@dataclass
class Point3D(Point):
    z: int = 0


@dataclass
class Line:
    start: Point
    end: Point


@dataclass
class Route:
    name: str
    line: Optional[Line] = None
    tags: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FrozenPoint:
    x: int
    y: int


@dataclass
class Shape:
    body: Union[Point, Line]
    label: Union[int, str, None] = None


@dataclass
class Dangling:
    child: "Nowhere"  # noqa: F821


@dataclass
class Holder:
    item: "Registered"  # noqa: F821


class Account:
    kind: ClassVar[str] = "account"
    owner: str
    balance: int
    currency: str
    note: str
    _audit: list

    def __init__(self, owner: str, balance: int, currency="EUR", note=None):
        if balance < 0:
            raise ValueError("balance must not be negative")
        self.owner = owner
        self.balance = balance
        self.currency = currency
        self.note = note
        self._audit = []


class Slotted:
    __slots__ = ("x", "y")
    x: int
    y: Optional[int]

    def __init__(self, x: int, y: Optional[int] = None):
        self.x = x
        self.y = y


class Bare:
    a: int
    b: Optional[str]


class Guarded:
    created: ClassVar[List[int]] = []
    x: int

    def __new__(cls, x: int):
        cls.created.append(x)
        return super().__new__(cls)

    def __init__(self, x: int):
        self.x = x


@dataclass
class Containers:
    mapping: Mapping
    ordered: OrderedDict
    sequence: Optional[tuple] = None


@dataclass
class Pointer:
    target: "Point"
    rest: "Nowhere"  # noqa: F821
