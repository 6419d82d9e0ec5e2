"""Update Feed Parser.

Resolves the update metadata applying to an installed product from either a
native ``updates.xml`` feed or a GitHub release payload, producing one
immutable model: Product -> UpdateChannel -> BuildInfo -> PatchInfo.

Progressive API Disclosure:
- Level 1: Simple functions - parse_update_data(), parse_update_file(),
  parse_release_data()
- Level 2: Configured parser - UpdateFeedParser class returning FeedParseResult
"""

__version__ = "0.1.0"
__author__ = "Update Feed Parser Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured parser
from .api import (
    FeedParseResult,
    UpdateFeedParser,
    parse_release_data,
    parse_update_data,
    parse_update_file,
)

# Model objects returned by all API levels
from .feed import (
    BuildInfo,
    ChannelStatus,
    Licensing,
    PatchInfo,
    Product,
    UpdateChannel,
)

# Configuration and errors
from .shared import (
    ConfigError,
    ConfigValidationError,
    FeedConfig,
    MalformedDocumentError,
    MalformedReleasePayloadError,
    UnrecognizedChannelStatusError,
    UpdateFeedError,
)
from .versioning import BuildNumber, BuildRange

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_update_data",
    "parse_update_file",
    "parse_release_data",

    # Level 2: Configured parser
    "UpdateFeedParser",
    "FeedParseResult",

    # Model
    "BuildInfo",
    "BuildNumber",
    "BuildRange",
    "ChannelStatus",
    "Licensing",
    "PatchInfo",
    "Product",
    "UpdateChannel",

    # Configuration and errors
    "FeedConfig",
    "ConfigError",
    "ConfigValidationError",
    "UpdateFeedError",
    "MalformedDocumentError",
    "MalformedReleasePayloadError",
    "UnrecognizedChannelStatusError",
]
