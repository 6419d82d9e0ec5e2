"""Build numbers and build ranges used by update feeds.

A build number is an optional product code followed by dot-separated numeric
components, e.g. ``IU-231.9011.34``. The last component may be the wildcard
``*`` (or ``SNAPSHOT``), which sorts above every concrete number.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# Integer value standing in for a wildcard component
SNAPSHOT_VALUE = 2 ** 31 - 1

_WILDCARD_TOKENS = ("*", "SNAPSHOT")
_PRODUCT_SEPARATOR = "-"


def _parse_component(version: str, component: str) -> int:
    if component in _WILDCARD_TOKENS:
        return SNAPSHOT_VALUE
    if not (component.isascii() and component.isdigit()):
        raise ValueError(f"Invalid version number: {version!r}")
    return int(component)


@dataclass(frozen=True)
class BuildNumber:
    """Product code plus ordered numeric components.

    Equality includes the product code; ordering compares components only.
    """

    product_code: str
    components: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.components:
            raise ValueError("Build number must have at least one component")

    @classmethod
    def from_string(cls, version: Optional[str]) -> Optional["BuildNumber"]:
        """Parse a build number string.

        Returns None for a missing or blank string and raises ValueError for a
        component that is neither an integer nor a wildcard.
        """
        return cls.from_string_with_product_code(version, "")

    @classmethod
    def from_string_with_product_code(
        cls, version: Optional[str], product_code: str
    ) -> Optional["BuildNumber"]:
        """Parse a build number, using ``product_code`` when the text has none."""
        if version is None:
            return None
        text = version.strip()
        if not text:
            return None

        code = product_code
        separator = text.find(_PRODUCT_SEPARATOR)
        if separator > 0:
            code = text[:separator]
            text = text[separator + 1:]

        components = []
        for part in text.split("."):
            value = _parse_component(version, part.strip())
            components.append(value)
            if value == SNAPSHOT_VALUE:
                break
        return cls(code, tuple(components))

    @property
    def is_snapshot(self) -> bool:
        return SNAPSHOT_VALUE in self.components

    @property
    def baseline_version(self) -> int:
        return self.components[0]

    def with_product_code(self, product_code: str) -> "BuildNumber":
        return BuildNumber(product_code, self.components)

    def as_string(self, include_product_code: bool = True) -> str:
        """Render as ``CODE-1.2.3``; wildcards render as ``*``."""
        rendered = ".".join(
            "*" if value == SNAPSHOT_VALUE else str(value) for value in self.components
        )
        if include_product_code and self.product_code:
            return f"{self.product_code}{_PRODUCT_SEPARATOR}{rendered}"
        return rendered

    def compare_to(self, other: "BuildNumber") -> int:
        """Compare components; negative, zero or positive like ``cmp``."""
        for mine, theirs in zip(self.components, other.components):
            if mine == theirs == SNAPSHOT_VALUE:
                return 0
            if mine == SNAPSHOT_VALUE:
                return 1
            if theirs == SNAPSHOT_VALUE:
                return -1
            if mine != theirs:
                return mine - theirs
        return len(self.components) - len(other.components)

    def __lt__(self, other: "BuildNumber") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "BuildNumber") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "BuildNumber") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "BuildNumber") -> bool:
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return self.as_string()


@dataclass(frozen=True)
class BuildRange:
    """Inclusive range of builds; a missing bound is unbounded on that side."""

    since: Optional[BuildNumber] = None
    until: Optional[BuildNumber] = None

    @classmethod
    def from_strings(
        cls, since: Optional[str], until: Optional[str]
    ) -> Optional["BuildRange"]:
        """Build a range from two optional strings; None when both are absent."""
        since_build = BuildNumber.from_string(since)
        until_build = BuildNumber.from_string(until)
        if since_build is None and until_build is None:
            return None
        return cls(since_build, until_build)

    def contains(self, build: BuildNumber) -> bool:
        if self.since is not None and build < self.since:
            return False
        if self.until is not None and build > self.until:
            return False
        return True

    def __contains__(self, build: BuildNumber) -> bool:
        return self.contains(build)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "since": str(self.since) if self.since else None,
            "until": str(self.until) if self.until else None,
        }

    def __str__(self) -> str:
        since = str(self.since) if self.since else ""
        until = str(self.until) if self.until else ""
        return f"{since}..{until}"
