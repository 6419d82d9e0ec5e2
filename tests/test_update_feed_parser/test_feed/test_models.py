"""Tests for the feed model objects."""

import pytest

from update_feed_parser.feed import BuildInfo, ChannelStatus, Product, UpdateChannel
from update_feed_parser.shared import UnrecognizedChannelStatusError
from update_feed_parser.versioning import BuildNumber


def make_build(number: str) -> BuildInfo:
    build_number = BuildNumber.from_string_with_product_code(number, "IU")
    return BuildInfo(number=build_number, api_version=build_number, version=number)


class TestChannelStatus:
    """Test channel status decoding."""

    def test_from_code(self):
        """Test decoding of every known code."""
        assert [ChannelStatus.from_code(s.code) for s in ChannelStatus] == list(ChannelStatus)

    def test_unknown_code(self):
        """Test strict and lenient handling of unknown codes."""
        with pytest.raises(UnrecognizedChannelStatusError) as exc_info:
            ChannelStatus.from_code("nightly")

        assert exc_info.value.code == "nightly"
        assert ChannelStatus.from_code("nightly", lenient=True) == ChannelStatus.RELEASE

    def test_display_name(self):
        """Test human-readable status names."""
        assert ChannelStatus.EAP.display_name == "Early Access Program"


class TestUpdateChannel:
    """Test update channel values."""

    def test_latest_build(self):
        """Test that the highest build number wins regardless of order."""
        channel = UpdateChannel(
            id="IDEA_Release",
            status=ChannelStatus.RELEASE,
            builds=(make_build("231.9"), make_build("231.10"), make_build("231.2")),
        )

        assert channel.latest_build.version == "231.10"

    def test_latest_build_empty(self):
        """Test a channel without builds."""
        assert UpdateChannel(id="IDEA_Release", status=ChannelStatus.RELEASE).latest_build is None

    def test_empty_id_rejected(self):
        """Test direct construction with an empty id."""
        with pytest.raises(ValueError, match="Channel id cannot be empty"):
            UpdateChannel(id="", status=ChannelStatus.RELEASE)

    def test_str(self):
        """Test string rendering of channels and products."""
        channel = UpdateChannel(id="IDEA_EAP", status=ChannelStatus.EAP)
        product = Product(name="IntelliJ IDEA", product_code="IU", channels=(channel,))

        assert str(channel) == "IDEA_EAP"
        assert str(product) == "IU"
        assert product.find_channel("IDEA_EAP") is channel
        assert product.find_channel("missing") is None
