"""Public parsing API for update feeds."""

from .parser import (
    FeedParseResult,
    UpdateFeedParser,
    load_source,
    parse_release_data,
    parse_update_data,
    parse_update_file,
)

__all__ = [
    "FeedParseResult",
    "UpdateFeedParser",
    "load_source",
    "parse_release_data",
    "parse_update_data",
    "parse_update_file",
]
