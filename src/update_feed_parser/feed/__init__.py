"""Canonical update feed model and the builders producing it.

Key Components:
    Product, UpdateChannel, BuildInfo, PatchInfo: Immutable feed model
    UpdateFeedBuilder: Builds the model from document nodes
    resolve_product: Finds a product entry in a feed document
    parse_release: Resolves a GitHub release payload through the same builders
"""

from .builders import UpdateFeedBuilder, parse_release_date
from .host import OS_SUFFIX, detect_os_suffix
from .models import (
    BuildInfo,
    ChannelStatus,
    Licensing,
    PatchInfo,
    Product,
    UpdateChannel,
)
from .release import (
    build_release_document,
    convert_markdown_to_html,
    parse_release,
)
from .resolver import find_product_node, resolve_product

__all__ = [
    "UpdateFeedBuilder",
    "parse_release_date",
    "OS_SUFFIX",
    "detect_os_suffix",
    "BuildInfo",
    "ChannelStatus",
    "Licensing",
    "PatchInfo",
    "Product",
    "UpdateChannel",
    "build_release_document",
    "convert_markdown_to_html",
    "parse_release",
    "find_product_node",
    "resolve_product",
]
