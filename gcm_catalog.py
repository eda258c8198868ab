#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple

# ========================================
# The Go primitive types under test.
# ========================================

# Order only fixes the report layout.
GO_PRIMITIVES = (
    "bool",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "int8",
    "int16",
    "int32",
    "int64",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "string",
    "int",
    "uint",
    "uintptr",
    "byte",
    "rune",
)

# alias -> underlying type
ALIASES: Dict[str, str] = {
    "byte": "uint8",
    "rune": "int32",
}


class TypeKind(Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"


_KINDS: Dict[str, TypeKind] = {
    "bool": TypeKind.BOOLEAN,
    "float32": TypeKind.FLOAT,
    "float64": TypeKind.FLOAT,
    "complex64": TypeKind.COMPLEX,
    "complex128": TypeKind.COMPLEX,
    "string": TypeKind.STRING,
}


def type_kind(name: str) -> TypeKind:
    """
    Classify a Go primitive name. Anything not listed explicitly is an integer.
    """
    if name in _KINDS:
        return _KINDS[name]
    if name in GO_PRIMITIVES:
        return TypeKind.INTEGER
    raise KeyError(f"unknown primitive type '{name}'")


def underlying(name: str) -> str:
    return ALIASES.get(name, name)


@dataclass(frozen=True)
class ConversionPair:
    from_type: str
    to_type: str

    @property
    def is_identity(self) -> bool:
        return self.from_type == self.to_type

    def __str__(self) -> str:
        return f"{self.from_type} -> {self.to_type}"


@dataclass(frozen=True)
class TypeCatalog:
    """
    An immutable, ordered set of type names.

    The self-product of the catalog is the domain of the matrix; the order of
    `names` fixes the order of every report.
    """
    names: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("type catalog must not be empty")
        seen = set()
        for name in self.names:
            if name in seen:
                raise ValueError(f"duplicate type name '{name}' in catalog")
            seen.add(name)

    @staticmethod
    def default() -> 'TypeCatalog':
        return TypeCatalog(GO_PRIMITIVES)

    @staticmethod
    def of(names: Iterable[str]) -> 'TypeCatalog':
        return TypeCatalog(tuple(names))

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def pairs(self) -> Iterator[ConversionPair]:
        """Yield the self-product: outer loop is the source type, inner loop the target."""
        for from_type in self.names:
            for to_type in self.names:
                yield ConversionPair(from_type, to_type)


@dataclass
class FailureSet:
    """
    Conversion pairs rejected by the compiler in one run.

    `entries` keeps every extracted pair in diagnostic order; membership is an
    exact (from, to) lookup.
    """
    entries: List[ConversionPair] = field(default_factory=list)
    _index: FrozenSet[ConversionPair] = field(default=frozenset(), init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = frozenset(self.entries)

    @staticmethod
    def of(pairs: Iterable[ConversionPair]) -> 'FailureSet':
        return FailureSet(list(pairs))

    def add(self, pair: ConversionPair) -> None:
        self.entries.append(pair)
        self._index = self._index | {pair}

    def contains(self, from_type: str, to_type: str) -> bool:
        return ConversionPair(from_type, to_type) in self._index

    def __contains__(self, pair: object) -> bool:
        return pair in self._index

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ConversionPair]:
        return iter(self.entries)

    @property
    def pairs(self) -> FrozenSet[ConversionPair]:
        return self._index
