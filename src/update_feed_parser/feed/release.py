"""GitHub release payloads as update feeds.

A release object (as returned by the GitHub releases API) is converted into a
single product / channel / build document in the ``updates.xml`` schema and
resolved through the same builders as a native feed, so both ingestion paths
share every field-resolution rule.
"""

import json
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import markdown

from update_feed_parser.feed.builders import UpdateFeedBuilder
from update_feed_parser.feed.models import ChannelStatus, Product
from update_feed_parser.feed.resolver import resolve_product
from update_feed_parser.shared import (
    FeedConfig,
    MalformedReleasePayloadError,
    get_logger,
)
from update_feed_parser.shared.config import DEFAULT_MARKDOWN_EXTENSIONS
from update_feed_parser.tree.node import FeedElement

VERSION_FIELD = "tag_name"
DESCRIPTION_FIELD = "body"

ReleasePayload = Union[Mapping[str, Any], str, bytes]
ChannelType = Union[str, ChannelStatus]


def convert_markdown_to_html(
    markdown_text: str,
    extensions: Iterable[str] = DEFAULT_MARKDOWN_EXTENSIONS,
) -> str:
    """Render release notes written in Markdown as an HTML fragment."""
    # The GitHub API returns CRLF line endings in release descriptions
    normalized = markdown_text.replace("\r\n", "\n")
    return markdown.markdown(normalized, extensions=list(extensions))


def decode_release_payload(release: ReleasePayload) -> Mapping[str, Any]:
    """Accept a decoded release object or its JSON text."""
    if isinstance(release, (str, bytes)):
        try:
            release = json.loads(release)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedReleasePayloadError(f"Release payload is not valid JSON: {e}") from e
    if not isinstance(release, Mapping):
        raise MalformedReleasePayloadError(
            f"Release payload must be a JSON object, got {type(release).__name__}"
        )
    return release


def extract_release_fields(release: Mapping[str, Any]) -> Tuple[str, str]:
    """Return the release version and description.

    Raises:
        MalformedReleasePayloadError: Naming every required field that is
            missing or null
    """
    missing: List[str] = []
    values: List[str] = []
    for field_name in (VERSION_FIELD, DESCRIPTION_FIELD):
        value = release.get(field_name)
        if value is None:
            missing.append(field_name)
            continue
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise MalformedReleasePayloadError(
                f"Release field {field_name!r} must be a string, "
                f"got {type(value).__name__}",
                missing_fields=[field_name],
            )
        values.append(str(value))

    if missing:
        raise MalformedReleasePayloadError(
            f"Release payload is missing required field(s): {', '.join(missing)}",
            missing_fields=missing,
        )
    return values[0], values[1]


def build_release_document(
    version: str,
    message_html: str,
    product_code: str,
    product_name: str,
    channel_type: ChannelType,
    repository_url: str,
    config: Optional[FeedConfig] = None,
) -> FeedElement:
    """Synthesize an ``updates.xml`` document for one release."""
    config = config or FeedConfig()
    channel_code = channel_type.code if isinstance(channel_type, ChannelStatus) else channel_type
    repository_url = repository_url.rstrip("/")
    releases_url = f"{repository_url}{config.releases_url_suffix}"
    issues_url = f"{repository_url}{config.issues_url_suffix}"

    products = FeedElement("products")
    product = products.add_child(FeedElement("product", {"name": product_name}))
    product.add_child(FeedElement("code", text=product_code))
    channel = product.add_child(FeedElement("channel", {
        "name": channel_code,
        "id": channel_code,
        "status": channel_code,
        "url": releases_url,
        "feedback": issues_url,
        "majorVersion": version,
        "licensing": channel_code,
    }))
    build = channel.add_child(FeedElement("build", {
        "number": version,
        "version": version,
        "fullNumber": version,
    }))
    build.add_child(FeedElement("message", text=message_html, cdata=True))
    build.add_child(FeedElement("button", {
        "name": "Download",
        "url": releases_url,
        "download": "true",
    }))
    return products


def parse_release(
    release: ReleasePayload,
    product_code: str,
    product_name: str,
    repository_url: str,
    channel_type: Optional[ChannelType] = None,
    os_suffix: Optional[str] = None,
    config: Optional[FeedConfig] = None,
    correlation_id: Optional[str] = None,
    builder: Optional[UpdateFeedBuilder] = None,
) -> Optional[Product]:
    """Resolve update data from a GitHub release object.

    Args:
        release: Release object, or its JSON text
        product_code: Code of the installed product
        product_name: Display name for the synthesized product entry
        repository_url: Repository URL the releases and issues URLs derive from
        channel_type: Active update channel type (defaults to the configured one)
        os_suffix: Platform tag for patch exclusions (detected when omitted)
        config: Parsing configuration
        correlation_id: Optional correlation ID for log records
        builder: Pre-configured builder, used to collect diagnostics

    Returns:
        A product with one channel holding one build

    Raises:
        MalformedReleasePayloadError: If tag_name or body is missing
    """
    config = config or FeedConfig()
    logger = get_logger(__name__, correlation_id or config.correlation_id, "release_bridge")

    payload = decode_release_payload(release)
    try:
        version, description = extract_release_fields(payload)
    except MalformedReleasePayloadError as e:
        logger.warning(
            "Failed to check for updates: incomplete release payload",
            extra={"missing_fields": e.missing_fields}
        )
        raise

    logger.info(
        "Converting release payload to update feed",
        extra={"release_version": version, "product_code": product_code}
    )
    document = build_release_document(
        version=version,
        message_html=convert_markdown_to_html(description, config.markdown_extensions),
        product_code=product_code,
        product_name=product_name,
        channel_type=channel_type or config.default_channel_type,
        repository_url=repository_url,
        config=config,
    )
    return resolve_product(
        document,
        product_code,
        os_suffix=os_suffix,
        config=config,
        correlation_id=correlation_id,
        builder=builder,
    )
