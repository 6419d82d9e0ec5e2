"""Document tree layer for update feed parsing.

Key Components:
    FeedNode: Capability protocol consumed by the feed builders
    EtreeNode: FeedNode over lxml / xml.etree elements
    FeedElement: In-memory element used for synthesized documents
    load_document: lxml-based loader turning markup into a root node
    get_mandatory_attribute / get_optional_attribute: attribute accessors
"""

from .accessors import (
    AttributeLookup,
    get_mandatory_attribute,
    get_optional_attribute,
    lookup_attribute,
)
from .loader import load_document
from .node import EtreeNode, FeedElement, FeedNode, as_feed_node

__all__ = [
    "AttributeLookup",
    "get_mandatory_attribute",
    "get_optional_attribute",
    "lookup_attribute",
    "load_document",
    "EtreeNode",
    "FeedElement",
    "FeedNode",
    "as_feed_node",
]
