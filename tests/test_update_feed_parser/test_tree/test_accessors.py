"""Tests for mandatory and optional attribute accessors."""

import pytest

from update_feed_parser.shared import MalformedDocumentError
from update_feed_parser.tree import (
    FeedElement,
    get_mandatory_attribute,
    get_optional_attribute,
    lookup_attribute,
)


class TestLookupAttribute:
    """Test non-raising lookups with fallback chaining."""

    def test_primary_wins(self):
        """Test that the first candidate present is used."""
        node = FeedElement("build", {"number": "1", "fullNumber": "1.2.3"})
        lookup = lookup_attribute(node, "fullNumber", "number")

        assert lookup.found
        assert lookup.value == "1.2.3"
        assert lookup.attribute == "fullNumber"

    def test_fallback_used(self):
        """Test that the fallback is used when the primary is absent."""
        lookup = lookup_attribute(FeedElement("build", {"number": "1"}), "fullNumber", "number")

        assert lookup.value == "1"
        assert lookup.attribute == "number"

    def test_missing_names_last_candidate(self):
        """Test the failed lookup names the last candidate tried."""
        lookup = lookup_attribute(FeedElement("patch"), "fullFrom", "from")

        assert not lookup.found
        assert lookup.attribute == "from"
        with pytest.raises(MalformedDocumentError, match="patch@from missing"):
            lookup.require()


class TestGetMandatoryAttribute:
    """Test the raising boundary."""

    def test_present(self):
        """Test a present attribute is returned."""
        assert get_mandatory_attribute(FeedElement("channel", {"id": "C"}), "id") == "C"

    def test_empty_string_is_present(self):
        """Test that an empty attribute value counts as present."""
        assert get_mandatory_attribute(FeedElement("channel", {"id": ""}), "id") == ""

    def test_missing(self):
        """Test the error names element and attribute."""
        with pytest.raises(MalformedDocumentError, match="channel@id missing") as exc_info:
            get_mandatory_attribute(FeedElement("channel"), "id")

        assert exc_info.value.element == "channel"
        assert exc_info.value.attribute == "id"

    def test_fallback(self):
        """Test fallback semantics: primary wins, else fallback is mandatory."""
        both = FeedElement("build", {"fullNumber": "IU-1.2", "number": "1"})
        only_fallback = FeedElement("build", {"number": "1"})

        assert get_mandatory_attribute(both, "fullNumber", "number") == "IU-1.2"
        assert get_mandatory_attribute(only_fallback, "fullNumber", "number") == "1"
        with pytest.raises(MalformedDocumentError, match="build@number missing"):
            get_mandatory_attribute(FeedElement("build"), "fullNumber", "number")


class TestGetOptionalAttribute:
    """Test optional lookups."""

    def test_optional(self):
        """Test present, absent and defaulted values."""
        node = FeedElement("channel", {"url": "http://x"})

        assert get_optional_attribute(node, "url") == "http://x"
        assert get_optional_attribute(node, "feedback") is None
        assert get_optional_attribute(node, "feedback", "none") == "none"
