"""Update feed API with progressive disclosure.

Level 1: module functions returning ``Optional[Product]``:
    parse_update_data(), parse_update_file(), parse_release_data()
Level 2: ``UpdateFeedParser`` returning ``FeedParseResult`` objects that also
carry diagnostics and metrics, with reusable configuration.

Every entry point propagates ``UpdateFeedError`` subclasses: a feed that
cannot be trusted yields no update information at all.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Union

from update_feed_parser.feed import (
    ChannelStatus,
    Product,
    UpdateFeedBuilder,
    parse_release,
    resolve_product,
)
from update_feed_parser.feed.release import ReleasePayload
from update_feed_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    FeedConfig,
    PerformanceMetrics,
    UpdateFeedError,
    get_logger,
)
from update_feed_parser.tree import FeedNode, as_feed_node, load_document

# Type definitions for input data
InputType = Union[str, bytes, Path, BinaryIO, TextIO, FeedNode, Any]

MS_PER_SECOND = 1000  # Milliseconds per second conversion


@dataclass
class FeedParseResult:
    """Outcome of one feed resolution.

    Attributes:
        product: The resolved product, or None if the feed has no entry for it
        diagnostics: Recovered field defects found while building the model
        performance: Timing and entity counters
        correlation_id: Correlation ID of the update check
    """

    product: Optional[Product] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.product is not None

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    @property
    def has_warnings(self) -> bool:
        return bool(self.get_diagnostics_by_severity(DiagnosticSeverity.WARNING))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": self.found,
            "product": self.product.to_dict() if self.product else None,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "processing_time_ms": self.performance.processing_time_ms,
            "correlation_id": self.correlation_id,
        }


def load_source(input_data: InputType, correlation_id: Optional[str] = None) -> FeedNode:
    """Turn any supported input into the document root node.

    Strings and bytes are XML content, Paths are files to read, objects with
    ``read()`` are file-like, and anything else must be a tree node.

    Raises:
        MalformedDocumentError: If markup cannot be parsed
        TypeError: If the input type is not supported
    """
    if isinstance(input_data, (str, bytes)):
        return load_document(input_data, correlation_id)
    if isinstance(input_data, Path):
        return load_document(input_data.read_bytes(), correlation_id)
    if hasattr(input_data, "read"):
        return load_document(input_data.read(), correlation_id)
    return as_feed_node(input_data)


def parse_update_data(
    input_data: InputType,
    product_code: str,
    config: Optional[FeedConfig] = None,
    correlation_id: Optional[str] = None,
    os_suffix: Optional[str] = None,
) -> Optional[Product]:
    """Resolve update data for a product from a native feed.

    Args:
        input_data: XML text or bytes, a Path, a file-like object, or a
            pre-parsed tree (lxml / ElementTree element, FeedElement)
        product_code: Code of the installed product
        config: Parsing configuration
        correlation_id: Optional correlation ID for log records
        os_suffix: Platform tag for patch exclusions (detected when omitted)

    Returns:
        The Product, or None when the feed has no entry for the product

    Examples:
        >>> product = parse_update_data(feed_xml, "IU")
        >>> product.channels[0].builds[0].version
        '2023.2'
    """
    parser = UpdateFeedParser(config=config, correlation_id=correlation_id, os_suffix=os_suffix)
    return parser.parse(input_data, product_code).product


def parse_update_file(
    file_path: Union[str, Path],
    product_code: str,
    config: Optional[FeedConfig] = None,
    correlation_id: Optional[str] = None,
    os_suffix: Optional[str] = None,
) -> Optional[Product]:
    """Resolve update data from a feed file on disk.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path_obj = Path(file_path)
    if not path_obj.is_file():
        raise FileNotFoundError(f"Feed file not found: {path_obj}")
    return parse_update_data(path_obj, product_code, config, correlation_id, os_suffix)


def parse_release_data(
    release: ReleasePayload,
    product_code: str,
    product_name: str,
    repository_url: str,
    channel_type: Optional[Union[str, ChannelStatus]] = None,
    config: Optional[FeedConfig] = None,
    correlation_id: Optional[str] = None,
    os_suffix: Optional[str] = None,
) -> Optional[Product]:
    """Resolve update data from a GitHub release object.

    Examples:
        >>> product = parse_release_data(
        ...     {"tag_name": "2024.1", "body": "## Fixes"},
        ...     "IC", "Community Edition", "https://github.com/acme/ide",
        ... )
        >>> product.channels[0].builds[0].version
        '2024.1'
    """
    parser = UpdateFeedParser(config=config, correlation_id=correlation_id, os_suffix=os_suffix)
    return parser.parse_release(
        release, product_code, product_name, repository_url, channel_type
    ).product


class UpdateFeedParser:
    """Reusable feed parser holding configuration and statistics.

    Examples:
        >>> parser = UpdateFeedParser(FeedConfig.lenient())
        >>> result = parser.parse(feed_xml, "IU")
        >>> result.found, len(result.diagnostics)
        (True, 0)
    """

    def __init__(
        self,
        config: Optional[FeedConfig] = None,
        correlation_id: Optional[str] = None,
        os_suffix: Optional[str] = None,
    ) -> None:
        self.config = config or FeedConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.os_suffix = os_suffix
        self.logger = get_logger(__name__, self.correlation_id, "update_feed_parser")

        self._parse_count = 0
        self._products_found = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0

    def parse(self, input_data: InputType, product_code: str) -> FeedParseResult:
        """Resolve a product from a native feed document."""
        start_time = time.time()
        builder = self._create_builder(product_code)
        self.logger.info(
            "Starting feed resolution",
            extra={"input_type": type(input_data).__name__, "product_code": product_code}
        )

        try:
            root = load_source(input_data, self.correlation_id)
            product = resolve_product(root, product_code, builder=builder)
        except UpdateFeedError as e:
            self._record_failure(start_time, e)
            raise

        return self._finish(builder, product, start_time)

    def parse_release(
        self,
        release: ReleasePayload,
        product_code: str,
        product_name: str,
        repository_url: str,
        channel_type: Optional[Union[str, ChannelStatus]] = None,
    ) -> FeedParseResult:
        """Resolve a product from a GitHub release payload."""
        start_time = time.time()
        builder = self._create_builder(product_code)

        try:
            product = parse_release(
                release,
                product_code,
                product_name,
                repository_url,
                channel_type=channel_type,
                config=self.config,
                correlation_id=self.correlation_id,
                builder=builder,
            )
        except UpdateFeedError as e:
            self._record_failure(start_time, e)
            raise

        return self._finish(builder, product, start_time)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get cumulative statistics for this parser instance."""
        average = (
            self._total_processing_time / self._parse_count if self._parse_count else 0.0
        )
        return {
            "parse_count": self._parse_count,
            "products_found": self._products_found,
            "failed_parses": self._failed_parses,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": average,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._products_found = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0

    def _create_builder(self, product_code: str) -> UpdateFeedBuilder:
        return UpdateFeedBuilder(
            product_code,
            os_suffix=self.os_suffix,
            config=self.config,
            correlation_id=self.correlation_id,
        )

    def _finish(
        self,
        builder: UpdateFeedBuilder,
        product: Optional[Product],
        start_time: float,
    ) -> FeedParseResult:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        builder.metrics.processing_time_ms = processing_time

        self._parse_count += 1
        self._total_processing_time += processing_time
        if product is not None:
            self._products_found += 1

        self.logger.info(
            "Feed resolution completed",
            extra={
                "found": product is not None,
                "builds_built": builder.metrics.builds_built,
                "diagnostics_count": len(builder.diagnostics),
                "processing_time_ms": processing_time,
            }
        )
        return FeedParseResult(
            product=product,
            diagnostics=list(builder.diagnostics),
            performance=builder.metrics,
            correlation_id=self.correlation_id,
        )

    def _record_failure(self, start_time: float, error: Exception) -> None:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._parse_count += 1
        self._failed_parses += 1
        self._total_processing_time += processing_time
        self.logger.warning(
            f"Feed resolution failed: {error}",
            extra={
                "error_type": type(error).__name__,
                "processing_time_ms": processing_time,
            }
        )
