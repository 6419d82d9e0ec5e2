"""Load feed markup into a document tree with lxml."""

from typing import Optional, Union

from lxml import etree

from update_feed_parser.shared.exceptions import MalformedDocumentError
from update_feed_parser.shared.logging import get_logger
from update_feed_parser.tree.node import EtreeNode

PREVIEW_LENGTH = 100  # Max length for content preview in error messages


def _create_parser() -> etree.XMLParser:
    # Feeds come from remote servers: no entity expansion, no network access
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


def load_document(
    content: Union[str, bytes], correlation_id: Optional[str] = None
) -> EtreeNode:
    """Parse XML text into the document root node.

    Args:
        content: XML document as text or encoded bytes
        correlation_id: Optional correlation ID for log records

    Returns:
        EtreeNode wrapping the document element

    Raises:
        MalformedDocumentError: If the markup is empty or not well-formed
    """
    logger = get_logger(__name__, correlation_id, "loader")

    if not content or not content.strip():
        raise MalformedDocumentError("Feed document is empty")

    if isinstance(content, str):
        # The text is already decoded, so any encoding declaration is stale
        if content.lstrip().startswith("<?xml"):
            content = _strip_declaration(content)
        data = content.encode("utf-8")
    else:
        data = content

    try:
        root = etree.fromstring(data, parser=_create_parser())
    except etree.XMLSyntaxError as e:
        preview = data[:PREVIEW_LENGTH].decode("utf-8", errors="replace")
        logger.warning(
            "Feed document is not well-formed",
            extra={"error": str(e), "preview": preview}
        )
        raise MalformedDocumentError(f"Feed document is not well-formed: {e}") from e

    logger.debug("Feed document loaded", extra={"root_tag": root.tag})
    return EtreeNode(root)


def _strip_declaration(text: str) -> str:
    stripped = text.lstrip()
    end = stripped.find("?>")
    if end < 0:
        return text
    return stripped[end + 2:]
