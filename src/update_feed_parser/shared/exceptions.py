"""Exception types raised by the update feed parsing pipeline.

Every propagated error aborts the parse of the whole document or payload; no
partially built model is ever returned.
"""

from typing import List, Optional, Sequence


class UpdateFeedError(Exception):
    """Base exception for all update feed parsing failures."""


class MalformedDocumentError(UpdateFeedError):
    """Raised when a feed document is structurally invalid.

    Covers missing mandatory attributes, unparsable build numbers, non-integer
    numeric attributes and markup that cannot be parsed at all.
    """

    def __init__(
        self,
        message: str,
        element: Optional[str] = None,
        attribute: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.element = element
        self.attribute = attribute


class UnrecognizedChannelStatusError(UpdateFeedError):
    """Raised when a channel status code maps to no known stability level."""

    def __init__(self, code: Optional[str]) -> None:
        super().__init__(f"Unrecognized channel status: {code!r}")
        self.code = code


class MalformedReleasePayloadError(UpdateFeedError):
    """Raised when a release JSON payload lacks required fields."""

    def __init__(self, message: str, missing_fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing_fields: List[str] = list(missing_fields)
