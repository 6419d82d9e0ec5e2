"""Builders turning feed document nodes into the canonical model.

One ``UpdateFeedBuilder`` is created per resolution. It carries the product
code the document is resolved against, the host OS suffix used for patch
exclusions, and collects diagnostics for the field defects it recovers from.
Everything else is fail-fast: a missing mandatory attribute, an invalid build
number or a non-integer evaluation period aborts the whole build.
"""

import datetime
import re
from typing import Any, Dict, List, Optional

from update_feed_parser.feed.host import OS_SUFFIX
from update_feed_parser.feed.models import (
    BuildInfo,
    ChannelStatus,
    Licensing,
    PatchInfo,
    Product,
    UpdateChannel,
)
from update_feed_parser.shared import (
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    FeedConfig,
    MalformedDocumentError,
    PerformanceMetrics,
    UnrecognizedChannelStatusError,
    get_logger,
)
from update_feed_parser.tree.accessors import get_mandatory_attribute, lookup_attribute
from update_feed_parser.tree.node import FeedNode
from update_feed_parser.versioning import BuildNumber, BuildRange

DEFAULT_RELEASE_DATE_FORMAT = "%Y%m%d"
_EIGHT_DIGITS = re.compile(r"[0-9]{8}")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_release_date(
    value: Optional[str],
    date_format: str = DEFAULT_RELEASE_DATE_FORMAT,
    logger: Optional[CorrelationLogger] = None,
) -> Optional[datetime.date]:
    """Parse a ``yyyyMMdd`` release date.

    A missing value yields None silently. A malformed value is logged at
    WARNING level and also yields None; this function never raises.
    """
    if value is None:
        return None

    is_candidate = (
        date_format != DEFAULT_RELEASE_DATE_FORMAT
        or _EIGHT_DIGITS.fullmatch(value) is not None
    )
    if is_candidate:
        try:
            return datetime.datetime.strptime(value, date_format).date()
        except ValueError:
            pass

    logger = logger or get_logger(__name__, component="release_date")
    logger.warning(
        f"Invalid build release date: {value}",
        extra={"release_date": value}
    )
    return None


class UpdateFeedBuilder:
    """Builds Product, UpdateChannel, BuildInfo and PatchInfo values.

    Attributes:
        product_code: Code the document is resolved against
        os_suffix: Platform tag compared against patch exclusions
        config: Parsing configuration
        diagnostics: Recovered field defects, in document order
        metrics: Counters for the entities built so far
    """

    def __init__(
        self,
        product_code: str,
        os_suffix: Optional[str] = None,
        config: Optional[FeedConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or FeedConfig()
        self.product_code = product_code
        self.os_suffix = os_suffix or self.config.os_suffix or OS_SUFFIX
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "feed_builder")
        self.diagnostics: List[DiagnosticEntry] = []
        self.metrics = PerformanceMetrics()

    def build_product(self, node: FeedNode) -> Product:
        name = get_mandatory_attribute(node, "name")
        channels = tuple(self.build_channel(child) for child in node.find_children("channel"))
        disable_machine_id = node.get_attribute("disableMachineId", "false") == "true"

        return Product(
            name=name,
            product_code=self.product_code,
            channels=channels,
            disable_machine_id=disable_machine_id,
        )

    def build_channel(self, node: FeedNode) -> UpdateChannel:
        channel_id = get_mandatory_attribute(node, "id")
        if not channel_id.strip():
            raise MalformedDocumentError(
                f"{node.tag}@id is empty", element=node.tag, attribute="id"
            )
        status = self._parse_status(node, channel_id)
        licensing = Licensing.EAP if node.get_attribute("licensing") == "eap" else Licensing.RELEASE
        eval_days = self._parse_eval_days(node)
        builds = tuple(self.build_build(child) for child in node.find_children("build"))

        self.metrics.channels_built += 1
        return UpdateChannel(
            id=channel_id,
            status=status,
            licensing=licensing,
            eval_days=eval_days,
            url=node.get_attribute("url"),
            builds=builds,
            name=node.get_attribute("name"),
            major_version=node.get_attribute("majorVersion"),
            feedback_url=node.get_attribute("feedback"),
        )

    def build_build(self, node: FeedNode) -> BuildInfo:
        number_lookup = lookup_attribute(node, "fullNumber", "number")
        number = self._parse_build_number(
            node, number_lookup.attribute, number_lookup.require(), self.product_code
        )

        api_version_text = node.get_attribute("apiVersion")
        api_version = None
        if api_version_text is not None:
            api_version = self._parse_optional_build_number(
                node, "apiVersion", api_version_text, number.product_code
            )

        version = node.get_attribute("version") or ""
        message_node = node.find_child("message")
        message = message_node.text_content() if message_node is not None else ""
        blog_post_node = node.find_child("blogPost")
        blog_post = blog_post_node.get_attribute("url") if blog_post_node is not None else None
        release_date = self._parse_release_date(node.get_attribute("releaseDate"), number)
        target = self._parse_target(node)
        patches = tuple(self.build_patch(child) for child in node.find_children("patch"))
        download_url = self._find_download_url(node)

        self.metrics.builds_built += 1
        return BuildInfo(
            number=number,
            api_version=api_version or number,
            version=version,
            message=message,
            blog_post=blog_post,
            release_date=release_date,
            target=target,
            patches=patches,
            download_url=download_url,
        )

    def build_patch(self, node: FeedNode) -> PatchInfo:
        from_lookup = lookup_attribute(node, "fullFrom", "from")
        from_build = self._parse_build_number(node, from_lookup.attribute, from_lookup.require())

        exclusions = node.get_attribute("exclusions")
        is_available = True
        if exclusions is not None:
            is_available = all(
                token.strip() != self.os_suffix for token in exclusions.split(",")
            )

        self.metrics.patches_built += 1
        return PatchInfo(
            from_build=from_build,
            size=node.get_attribute("size"),
            is_available=is_available,
        )

    def _parse_status(self, node: FeedNode, channel_id: str) -> ChannelStatus:
        code = node.get_attribute("status")
        try:
            return ChannelStatus.from_code(code)
        except UnrecognizedChannelStatusError:
            if not self.config.lenient_channel_status:
                raise
        self._warn(
            f"Unrecognized status {code!r} on channel {channel_id!r}, treating as release",
            details={"channel": channel_id, "status": code},
        )
        return ChannelStatus.RELEASE

    def _parse_eval_days(self, node: FeedNode) -> int:
        value = node.get_attribute("evalDays")
        if value is None:
            return self.config.default_eval_days
        # Plain ASCII integer literal only
        if _INTEGER.fullmatch(value) is None:
            raise MalformedDocumentError(
                f"{node.tag}@evalDays is not an integer: {value!r}",
                element=node.tag,
                attribute="evalDays",
            )
        return int(value)

    def _parse_release_date(
        self, value: Optional[str], number: BuildNumber
    ) -> Optional[datetime.date]:
        release_date = parse_release_date(value, self.config.release_date_format, self.logger)
        if value is not None and release_date is None:
            self._add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"Invalid build release date: {value}",
                details={"build": str(number), "release_date": value},
            )
        return release_date

    def _parse_target(self, node: FeedNode) -> Optional[BuildRange]:
        since = node.get_attribute("targetSince")
        until = node.get_attribute("targetUntil")
        try:
            return BuildRange.from_strings(since, until)
        except ValueError as e:
            raise MalformedDocumentError(
                f"{node.tag}@targetSince/targetUntil is not a valid build range: "
                f"{since!r}..{until!r}",
                element=node.tag,
                attribute="targetSince" if since is not None else "targetUntil",
            ) from e

    def _find_download_url(self, node: FeedNode) -> Optional[str]:
        for button in node.find_children("button"):
            if button.get_attribute("download") is not None:
                return get_mandatory_attribute(button, "url")
        return None

    def _parse_build_number(
        self, node: FeedNode, attribute: str, value: str, product_code: str = ""
    ) -> BuildNumber:
        number = self._parse_optional_build_number(node, attribute, value, product_code)
        if number is None:
            raise MalformedDocumentError(
                f"{node.tag}@{attribute} is empty",
                element=node.tag,
                attribute=attribute,
            )
        return number

    def _parse_optional_build_number(
        self, node: FeedNode, attribute: str, value: str, product_code: str
    ) -> Optional[BuildNumber]:
        try:
            return BuildNumber.from_string_with_product_code(value, product_code)
        except ValueError as e:
            raise MalformedDocumentError(
                f"{node.tag}@{attribute} is not a valid build number: {value!r}",
                element=node.tag,
                attribute=attribute,
            ) from e

    def _warn(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.warning(message, extra=details)
        self._add_diagnostic(DiagnosticSeverity.WARNING, message, details)

    def _add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component="feed_builder",
                details=details,
                correlation_id=self.correlation_id,
            )
        )
