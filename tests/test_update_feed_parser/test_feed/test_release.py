"""Tests for converting GitHub release payloads into the feed model."""

import json

import pytest

from update_feed_parser.feed import (
    ChannelStatus,
    Licensing,
    build_release_document,
    convert_markdown_to_html,
    parse_release,
)
from update_feed_parser.feed.release import decode_release_payload, extract_release_fields
from update_feed_parser.shared import FeedConfig, MalformedReleasePayloadError
from update_feed_parser.tree import load_document
from update_feed_parser.feed.resolver import resolve_product

RELEASE = {"tag_name": "2024.1", "body": "## Fixes\n- fixed bug"}
REPOSITORY = "https://github.com/acme/ide"


class TestConvertMarkdown:
    """Test release note rendering."""

    def test_heading_and_list(self):
        """Test rendering of a heading followed by a list."""
        html = convert_markdown_to_html("## Fixes\n- fixed bug")

        assert "<h2>Fixes</h2>" in html
        assert "<li>fixed bug</li>" in html

    def test_crlf_line_endings(self):
        """Test that CRLF line endings are normalized."""
        html = convert_markdown_to_html("## Fixes\r\n\r\n- one\r\n- two")

        assert "<li>one</li>" in html
        assert "<li>two</li>" in html
        assert "\r" not in html


class TestReleasePayload:
    """Test payload decoding and field extraction."""

    def test_decode_json_text(self):
        """Test decoding of JSON text and bytes."""
        assert decode_release_payload(json.dumps(RELEASE)) == RELEASE
        assert decode_release_payload(json.dumps(RELEASE).encode()) == RELEASE

    def test_decode_invalid(self):
        """Test rejection of invalid JSON and non-objects."""
        with pytest.raises(MalformedReleasePayloadError, match="not valid JSON"):
            decode_release_payload("{")

        with pytest.raises(MalformedReleasePayloadError, match="must be a JSON object"):
            decode_release_payload("[]")

        with pytest.raises(MalformedReleasePayloadError, match="not valid JSON"):
            decode_release_payload(b'{"tag_name": "\xff"}')

    @pytest.mark.parametrize(
        "payload, missing",
        [
            ({"body": "notes"}, ["tag_name"]),
            ({"tag_name": "1.0"}, ["body"]),
            ({}, ["tag_name", "body"]),
            ({"tag_name": None, "body": "notes"}, ["tag_name"]),
        ],
    )
    def test_missing_fields(self, payload, missing):
        """Test that every missing field is reported."""
        with pytest.raises(MalformedReleasePayloadError) as exc_info:
            extract_release_fields(payload)

        assert exc_info.value.missing_fields == missing
        assert ", ".join(missing) in str(exc_info.value)

    def test_non_string_field(self):
        """Test rejection of structured field values."""
        with pytest.raises(MalformedReleasePayloadError, match="must be a string"):
            extract_release_fields({"tag_name": ["1.0"], "body": ""})

    def test_numeric_field_accepted(self):
        """Test that numeric tags are rendered as text."""
        assert extract_release_fields({"tag_name": 2024, "body": ""}) == ("2024", "")


class TestBuildReleaseDocument:
    """Test the synthesized feed document."""

    def test_document_shape(self):
        """Test the product, channel, build and button structure."""
        document = build_release_document(
            version="2024.1",
            message_html="<p>notes</p>",
            product_code="IC",
            product_name="Community",
            channel_type="eap",
            repository_url=REPOSITORY + "/",
        )

        product = document.find_child("product")
        channel = product.find_child("channel")
        build = channel.find_child("build")
        button = build.find_child("button")

        assert product.get_attribute("name") == "Community"
        assert product.find_child("code").text == "IC"
        assert channel.attributes == {
            "name": "eap",
            "id": "eap",
            "status": "eap",
            "url": "https://github.com/acme/ide/releases/latest",
            "feedback": "https://github.com/acme/ide/issues",
            "majorVersion": "2024.1",
            "licensing": "eap",
        }
        assert build.attributes == {
            "number": "2024.1",
            "version": "2024.1",
            "fullNumber": "2024.1",
        }
        assert build.find_child("message").cdata
        assert button.get_attribute("url") == "https://github.com/acme/ide/releases/latest"
        assert button.has_attribute("download")

    def test_accepts_channel_status(self):
        """Test that a ChannelStatus can label the channel."""
        document = build_release_document(
            "1.0", "", "IC", "Community", ChannelStatus.BETA, REPOSITORY
        )
        channel = document.find_child("product").find_child("channel")
        assert channel.get_attribute("status") == "beta"


class TestParseRelease:
    """Test end-to-end release resolution."""

    def test_round_trip(self):
        """Test the release converts to one channel with one build."""
        product = parse_release(RELEASE, "IC", "Community", REPOSITORY, os_suffix="unix")

        assert str(product) == "IC"
        assert product.name == "Community"
        assert len(product.channels) == 1
        channel = product.channels[0]
        assert channel.status == ChannelStatus.RELEASE
        assert channel.licensing == Licensing.RELEASE
        assert channel.eval_days == 30
        assert channel.url == REPOSITORY + "/releases/latest"
        assert channel.feedback_url == REPOSITORY + "/issues"

        assert len(channel.builds) == 1
        build = channel.builds[0]
        assert build.version == "2024.1"
        assert str(build.number) == "IC-2024.1"
        assert "<h2>" in build.message
        assert "<li>fixed bug</li>" in build.message
        assert build.download_url == REPOSITORY + "/releases/latest"
        assert build.release_date is None
        assert build.patches == ()

    def test_json_text_payload(self):
        """Test that JSON text is accepted."""
        product = parse_release(json.dumps(RELEASE), "IC", "Community", REPOSITORY)
        assert product.channels[0].builds[0].version == "2024.1"

    def test_channel_type(self):
        """Test the active channel type labels the channel."""
        product = parse_release(RELEASE, "IC", "Community", REPOSITORY, channel_type="eap")

        assert product.channels[0].status == ChannelStatus.EAP
        assert product.channels[0].licensing == Licensing.EAP

    def test_default_channel_type_from_config(self):
        """Test the configured default channel type."""
        config = FeedConfig(default_channel_type="milestone")
        product = parse_release(RELEASE, "IC", "Community", REPOSITORY, config=config)

        assert product.channels[0].status == ChannelStatus.MILESTONE

    @pytest.mark.parametrize("field_name", ["tag_name", "body"])
    def test_missing_field(self, field_name):
        """Test that omitting either required field raises."""
        payload = dict(RELEASE)
        del payload[field_name]

        with pytest.raises(MalformedReleasePayloadError, match=field_name):
            parse_release(payload, "IC", "Community", REPOSITORY)

    def test_matches_native_document_path(self):
        """Test that the serialized document resolves to the same product."""
        direct = parse_release(RELEASE, "IC", "Community", REPOSITORY, os_suffix="unix")

        document = build_release_document(
            "2024.1",
            convert_markdown_to_html(RELEASE["body"]),
            "IC",
            "Community",
            "release",
            REPOSITORY,
        )
        via_xml = resolve_product(load_document(document.to_xml()), "IC", os_suffix="unix")

        assert via_xml == direct
