"""Tree-node capability consumed by the feed builders.

The builders never touch a concrete XML library type. They work against the
``FeedNode`` protocol ("has a tag, named attributes, named children and text
content"), which is satisfied by:

    EtreeNode: wrapper around lxml or xml.etree elements
    FeedElement: the package's own dataclass tree, used for synthesized
        documents and serializable back to XML with lxml
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from lxml import etree


@runtime_checkable
class FeedNode(Protocol):
    """Capability required from a document node by the feed builders."""

    @property
    def tag(self) -> str:
        ...

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def find_children(self, tag: str) -> List["FeedNode"]:
        ...

    def find_child(self, tag: str) -> Optional["FeedNode"]:
        ...

    def text_content(self) -> str:
        ...


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


class EtreeNode:
    """FeedNode view over an lxml or xml.etree element."""

    __slots__ = ("_element",)

    def __init__(self, element: Any) -> None:
        self._element = element

    @property
    def element(self) -> Any:
        """Get the wrapped library element."""
        return self._element

    @property
    def tag(self) -> str:
        return _local_name(self._element.tag)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._element.get(name, default)

    def find_children(self, tag: str) -> List["EtreeNode"]:
        # Comments and processing instructions carry non-string tags
        return [
            EtreeNode(child) for child in self._element
            if isinstance(child.tag, str) and _local_name(child.tag) == tag
        ]

    def find_child(self, tag: str) -> Optional["EtreeNode"]:
        for child in self._element:
            if isinstance(child.tag, str) and _local_name(child.tag) == tag:
                return EtreeNode(child)
        return None

    def text_content(self) -> str:
        return "".join(self._element.itertext())

    def __repr__(self) -> str:
        return f"EtreeNode(<{self.tag}>)"


@dataclass(eq=False)
class FeedElement:
    """In-memory document element.

    Mirrors the subset of XML needed by update feeds: a tag, string
    attributes, leading text and ordered child elements.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["FeedElement"] = field(default_factory=list)
    cdata: bool = False  # Serialize text as a CDATA section

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")
        for key, value in self.attributes.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError("Attribute name and value must be strings")

    def add_child(self, child: "FeedElement") -> "FeedElement":
        """Append a child element and return it."""
        if not isinstance(child, FeedElement):
            raise TypeError("Child must be a FeedElement instance")
        self.children.append(child)
        return child

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def find_children(self, tag: str) -> List["FeedElement"]:
        return [child for child in self.children if child.tag == tag]

    def find_child(self, tag: str) -> Optional["FeedElement"]:
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def text_content(self) -> str:
        parts = [self.text or ""]
        parts.extend(child.text_content() for child in self.children)
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": dict(self.attributes),
        }
        if self.text:
            result["text"] = self.text
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def to_etree(self) -> Any:
        """Convert to an lxml element."""
        element = etree.Element(self.tag)
        for key, value in self.attributes.items():
            element.set(key, value)
        if self.text:
            # A CDATA section cannot contain its own terminator
            if self.cdata and "]]>" not in self.text:
                element.text = etree.CDATA(self.text)
            else:
                element.text = self.text
        for child in self.children:
            element.append(child.to_etree())
        return element

    def to_xml(self, pretty_print: bool = True) -> str:
        """Serialize to XML text."""
        return etree.tostring(
            self.to_etree(), encoding="unicode", pretty_print=pretty_print
        )


NodeSource = Union[FeedElement, EtreeNode, Any]


def as_feed_node(obj: NodeSource) -> FeedNode:
    """Adapt a supported tree object to the FeedNode capability.

    Accepts FeedElement, EtreeNode, lxml elements and element trees, and
    xml.etree elements and element trees.

    Raises:
        TypeError: If the object is not a recognised tree node
    """
    if isinstance(obj, (FeedElement, EtreeNode)):
        return obj
    # ElementTree objects expose the document element through getroot()
    if hasattr(obj, "getroot") and not hasattr(obj, "tag"):
        obj = obj.getroot()
    if hasattr(obj, "tag") and hasattr(obj, "get") and hasattr(obj, "itertext"):
        return EtreeNode(obj)
    raise TypeError(f"Unsupported document node type: {type(obj).__name__}")
