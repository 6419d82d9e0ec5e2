"""Build number model shared by the feed builders."""

from .build_number import SNAPSHOT_VALUE, BuildNumber, BuildRange

__all__ = [
    "SNAPSHOT_VALUE",
    "BuildNumber",
    "BuildRange",
]
