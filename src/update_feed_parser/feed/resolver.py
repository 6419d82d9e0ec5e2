"""Locate a product in a feed document and build its model."""

from typing import Optional

from update_feed_parser.feed.builders import UpdateFeedBuilder
from update_feed_parser.feed.models import Product
from update_feed_parser.shared import FeedConfig
from update_feed_parser.tree.node import FeedNode


def find_product_node(root: FeedNode, product_code: str) -> Optional[FeedNode]:
    """Return the first ``product`` child listing ``product_code`` as a code.

    Codes are compared after stripping surrounding whitespace, case-sensitively.
    """
    for product in root.find_children("product"):
        for code in product.find_children("code"):
            if code.text_content().strip() == product_code:
                return product
    return None


def resolve_product(
    root: FeedNode,
    product_code: str,
    os_suffix: Optional[str] = None,
    config: Optional[FeedConfig] = None,
    correlation_id: Optional[str] = None,
    builder: Optional[UpdateFeedBuilder] = None,
) -> Optional[Product]:
    """Resolve the product entry for ``product_code``.

    Args:
        root: Document root (the ``products`` element)
        product_code: Code of the installed product
        os_suffix: Platform tag for patch exclusions (detected when omitted)
        config: Parsing configuration
        correlation_id: Optional correlation ID for log records
        builder: Pre-configured builder, used to collect diagnostics

    Returns:
        The Product, or None when the feed has no entry for the product
    """
    builder = builder or UpdateFeedBuilder(
        product_code, os_suffix=os_suffix, config=config, correlation_id=correlation_id
    )

    node = find_product_node(root, product_code)
    builder.metrics.products_scanned += len(root.find_children("product"))
    if node is None:
        builder.logger.info(
            "No feed entry for product",
            extra={"product_code": product_code}
        )
        return None

    product = builder.build_product(node)
    builder.logger.debug(
        "Product resolved",
        extra={
            "product_code": product_code,
            "channel_count": len(product.channels),
        }
    )
    return product
