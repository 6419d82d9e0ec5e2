"""Canonical update feed model.

Product 1-* UpdateChannel 1-* BuildInfo 1-* PatchInfo. Every entity is a
frozen dataclass built once from a feed document and never mutated.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from update_feed_parser.shared.exceptions import UnrecognizedChannelStatusError
from update_feed_parser.versioning import BuildNumber, BuildRange

_STATUS_DISPLAY_NAMES = {
    "eap": "Early Access Program",
    "milestone": "Milestone releases",
    "beta": "Beta releases or public previews",
    "release": "New major version releases",
}


class ChannelStatus(Enum):
    """Release stability level of an update channel."""

    EAP = "eap"
    MILESTONE = "milestone"
    BETA = "beta"
    RELEASE = "release"

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _STATUS_DISPLAY_NAMES[self.value]

    @classmethod
    def from_code(cls, code: Optional[str], lenient: bool = False) -> "ChannelStatus":
        """Decode a status code string.

        Args:
            code: Value of the channel's status attribute
            lenient: Map unknown or missing codes to RELEASE instead of raising

        Raises:
            UnrecognizedChannelStatusError: If the code is unknown and not lenient
        """
        for status in cls:
            if status.value == code:
                return status
        if lenient:
            return cls.RELEASE
        raise UnrecognizedChannelStatusError(code)


class Licensing(Enum):
    """Licensing tier of an update channel."""

    EAP = "eap"
    RELEASE = "release"


@dataclass(frozen=True)
class PatchInfo:
    """Incremental update from an earlier build."""

    from_build: BuildNumber
    size: Optional[str] = None
    is_available: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": str(self.from_build),
            "size": self.size,
            "is_available": self.is_available,
        }


@dataclass(frozen=True)
class BuildInfo:
    """One released build with its notes, patches and download link."""

    number: BuildNumber
    api_version: BuildNumber
    version: str = ""
    message: str = ""
    blog_post: Optional[str] = None
    release_date: Optional[datetime.date] = None
    target: Optional[BuildRange] = None
    patches: Tuple[PatchInfo, ...] = ()
    download_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": str(self.number),
            "api_version": str(self.api_version),
            "version": self.version,
            "message": self.message,
            "blog_post": self.blog_post,
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "target": self.target.to_dict() if self.target else None,
            "patches": [patch.to_dict() for patch in self.patches],
            "download_url": self.download_url,
        }

    def __str__(self) -> str:
        return f"{self.number}/{self.version}"


@dataclass(frozen=True)
class UpdateChannel:
    """Named update track with its own build history."""

    id: str
    status: ChannelStatus
    licensing: Licensing = Licensing.RELEASE
    eval_days: int = 30
    url: Optional[str] = None
    builds: Tuple[BuildInfo, ...] = ()
    name: Optional[str] = None
    major_version: Optional[str] = None
    feedback_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Channel id cannot be empty")

    @property
    def latest_build(self) -> Optional[BuildInfo]:
        """Get the highest-numbered build in the channel."""
        if not self.builds:
            return None
        return max(self.builds, key=lambda build: build.number)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.code,
            "licensing": self.licensing.name,
            "eval_days": self.eval_days,
            "url": self.url,
            "name": self.name,
            "major_version": self.major_version,
            "feedback_url": self.feedback_url,
            "builds": [build.to_dict() for build in self.builds],
        }

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Product:
    """Feed entry for one product, resolved against a product code."""

    name: str
    product_code: str
    channels: Tuple[UpdateChannel, ...] = field(default=())
    disable_machine_id: bool = False

    def find_channel(self, channel_id: str) -> Optional[UpdateChannel]:
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "product_code": self.product_code,
            "disable_machine_id": self.disable_machine_id,
            "channels": [channel.to_dict() for channel in self.channels],
        }

    def __str__(self) -> str:
        return self.product_code
