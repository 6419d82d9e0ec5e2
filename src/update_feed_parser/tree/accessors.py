"""Attribute accessors with mandatory-versus-optional semantics.

Lookups are composed through ``AttributeLookup`` results; only the
``get_mandatory_attribute`` boundary turns a failed lookup into a
``MalformedDocumentError``.
"""

from dataclasses import dataclass
from typing import Optional

from update_feed_parser.shared.exceptions import MalformedDocumentError
from update_feed_parser.tree.node import FeedNode


@dataclass(frozen=True)
class AttributeLookup:
    """Outcome of looking up one attribute from a list of candidate names.

    Attributes:
        value: The attribute value, or None when no candidate is present
        attribute: Name of the attribute that supplied the value, or the last
            candidate tried when none did
        element: Tag of the node that was searched
    """

    value: Optional[str]
    attribute: str
    element: str

    @property
    def found(self) -> bool:
        return self.value is not None

    def require(self) -> str:
        """Return the value or raise MalformedDocumentError."""
        if self.value is None:
            raise MalformedDocumentError(
                f"{self.element}@{self.attribute} missing",
                element=self.element,
                attribute=self.attribute,
            )
        return self.value


def lookup_attribute(node: FeedNode, name: str, *fallbacks: str) -> AttributeLookup:
    """Look up ``name``, then each fallback in turn, without raising."""
    attribute = name
    for attribute in (name, *fallbacks):
        value = node.get_attribute(attribute)
        if value is not None:
            return AttributeLookup(value, attribute, node.tag)
    return AttributeLookup(None, attribute, node.tag)


def get_mandatory_attribute(
    node: FeedNode, name: str, fallback: Optional[str] = None
) -> str:
    """Get a required attribute value.

    With a fallback, the primary attribute wins when present; otherwise the
    fallback becomes mandatory and the error names the fallback.

    Raises:
        MalformedDocumentError: If neither attribute is present
    """
    if fallback is None:
        return lookup_attribute(node, name).require()
    return lookup_attribute(node, name, fallback).require()


def get_optional_attribute(
    node: FeedNode, name: str, default: Optional[str] = None
) -> Optional[str]:
    return node.get_attribute(name, default)
