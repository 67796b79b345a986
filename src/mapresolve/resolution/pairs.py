"""Type identities and the (source, target) pairs user mappings are keyed by."""

from collections.abc import Hashable
from typing import NamedTuple

from mapresolve._types.names import type_name

#: An opaque, hashable identifier for a type. Python type objects, typing
#: constructs and strings produced by an external analyser all qualify; the
#: resolver only ever compares them for equality.
TypeIdentity = Hashable


class TypePair(NamedTuple):
    """Ordered (source, target) key.

    Directionality matters: ``TypePair(A, B) != TypePair(B, A)``. Since this is
    a tuple, a plain ``(source, target)`` tuple compares and hashes equal to
    the corresponding pair.
    """

    source: TypeIdentity
    target: TypeIdentity

    def __str__(self) -> str:
        return f"{type_name(self.source)} -> {type_name(self.target)}"


def as_type_pair(pair: "TypePair | tuple[TypeIdentity, TypeIdentity]") -> TypePair:
    if isinstance(pair, TypePair):
        return pair
    source, target = pair
    return TypePair(source, target)
