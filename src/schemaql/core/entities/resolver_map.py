"""Resolver map entities.

A resolver map describes, per GraphQL type name, which resolvers should be
bound when an executable schema is built. Entries only name resolvers;
nothing is instantiated until the schema is built.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# A field resolver is either a callable or a resolver registry identifier
ResolverReference = Callable[..., Any] | str


@dataclass
class TypeResolvers:
    """Resolvers configured for a single GraphQL type.

    Attributes:
        resolver: Registry identifier of a type-level resolver object. Its
            attributes named after the type's fields become field resolvers.
        fields: Explicit field resolvers, keyed by field name. They take
            precedence over the type-level resolver object.
    """

    resolver: str | None = None
    fields: dict[str, ResolverReference] = field(default_factory=dict)

    def merge_with(self, other: "TypeResolvers") -> "TypeResolvers":
        """Merge another entry on top of this one.

        Rules:
        - resolver: the other identifier wins when it is set
        - fields: merged key by key, the other entry wins per field

        Args:
            other: The entry registered later.

        Returns:
            A new TypeResolvers with merged values.
        """
        merged_fields = dict(self.fields)
        for field_name, reference in other.fields.items():
            merged_fields[field_name] = reference

        return TypeResolvers(
            resolver=other.resolver if other.resolver is not None else self.resolver,
            fields=merged_fields,
        )


ResolverMap = dict[str, TypeResolvers]


def merge_resolver_maps(base: ResolverMap, other: Mapping[str, TypeResolvers]) -> ResolverMap:
    """Deep-merge two resolver maps.

    Types only present in one map are copied over; types present in both
    are merged with ``TypeResolvers.merge_with`` so that field-level entries
    from both maps survive.

    Args:
        base: The map accumulated so far.
        other: The map registered later.

    Returns:
        A new merged ResolverMap. Neither input is modified.
    """
    merged: ResolverMap = {
        type_name: TypeResolvers(resolver=entry.resolver, fields=dict(entry.fields))
        for type_name, entry in base.items()
    }
    for type_name, entry in other.items():
        if type_name in merged:
            merged[type_name] = merged[type_name].merge_with(entry)
        else:
            merged[type_name] = TypeResolvers(resolver=entry.resolver, fields=dict(entry.fields))
    return merged
