"""Namespace resolution: tag name + visible ``xmlns`` declarations -> class.

Resolution is lexical. Walking from the element up through its ancestors,
the nearest declaration of the tag's prefix (the empty prefix for the
default namespace) determines the namespace URI. The fully-qualified name
is ``<uri>.<local name>``, and whether that names a class is decided by the
semantic model alone. Every miss is a silent ``None``.
"""

from __future__ import annotations

from viewlint.models.document import ElementNode
from viewlint.models.semantic import SemanticClass, SemanticModel


def resolve_namespace(element: ElementNode, prefix: str) -> str | None:
    """Return the URI bound to ``prefix`` at ``element``, or None if unbound.

    An empty URI (``xmlns=""``) un-declares the binding and yields None.
    """
    for node in element.ancestors(include_self=True):
        declared = node.namespace_declarations()
        if prefix in declared:
            return declared[prefix] or None
    return None


def resolve_class_name(element: ElementNode) -> str | None:
    """Candidate fully-qualified class name for ``element``'s tag."""
    prefix, sep, _ = element.name.partition(":")
    if sep and not prefix:
        return None
    local_name = element.local_name
    if not local_name or ":" in local_name:
        return None
    uri = resolve_namespace(element, element.prefix)
    if uri is None:
        return None
    return f"{uri}.{local_name}"


def resolve_class(element: ElementNode, model: SemanticModel) -> SemanticClass | None:
    """Resolve ``element`` to a class of ``model``.

    Aggregations, unknown tags and unbound prefixes all resolve to None.
    """
    fqn = resolve_class_name(element)
    if fqn is None:
        return None
    return model.lookup_class(fqn)
