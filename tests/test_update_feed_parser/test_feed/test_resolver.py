"""Tests for locating a product in a feed document."""

import pytest

from update_feed_parser.feed import UpdateFeedBuilder, find_product_node, resolve_product
from update_feed_parser.shared import MalformedDocumentError
from update_feed_parser.tree import FeedElement, load_document

FEED = """<?xml version="1.0" encoding="UTF-8"?>
<products>
  <product name="IntelliJ IDEA">
    <code>IC</code>
    <code> IU </code>
    <channel id="IDEA_Release" status="release" licensing="release">
      <build number="231.9011.34" version="2023.1.2" releaseDate="20230525"/>
    </channel>
  </product>
  <product name="PyCharm">
    <code>PC</code>
    <channel id="PC_Release" status="release"/>
  </product>
  <product name="Broken">
    <code>BR</code>
    <channel status="release"/>
  </product>
</products>
"""


class TestFindProductNode:
    """Test product lookup by code."""

    def test_finds_by_any_code(self):
        """Test that any listed code selects the product, ignoring whitespace."""
        root = load_document(FEED)

        assert find_product_node(root, "IC").get_attribute("name") == "IntelliJ IDEA"
        assert find_product_node(root, "IU").get_attribute("name") == "IntelliJ IDEA"
        assert find_product_node(root, "PC").get_attribute("name") == "PyCharm"

    def test_case_sensitive(self):
        """Test that codes are compared case-sensitively."""
        assert find_product_node(load_document(FEED), "iu") is None

    def test_first_match_wins(self):
        """Test that the first matching product in document order is used."""
        root = FeedElement("products")
        for name in ("First", "Second"):
            product = root.add_child(FeedElement("product", {"name": name}))
            product.add_child(FeedElement("code", text="XX"))

        assert find_product_node(root, "XX").get_attribute("name") == "First"


class TestResolveProduct:
    """Test product resolution."""

    def test_found(self):
        """Test that the resolved product carries the requested code."""
        product = resolve_product(load_document(FEED), "IU", os_suffix="unix")

        assert str(product) == "IU"
        assert product.name == "IntelliJ IDEA"
        build = product.channels[0].builds[0]
        assert str(build.number) == "IU-231.9011.34"

    def test_same_entry_different_code(self):
        """Test that the product code is the requested one, not the first listed."""
        product = resolve_product(load_document(FEED), "IC", os_suffix="unix")
        assert product.channels[0].builds[0].number.product_code == "IC"

    def test_not_found(self):
        """Test that an unknown product yields None."""
        assert resolve_product(load_document(FEED), "WS") is None

    def test_empty_document(self):
        """Test a document without products."""
        assert resolve_product(load_document("<products/>"), "IU") is None

    def test_other_products_not_built(self):
        """Test that malformed entries of other products are never touched."""
        assert resolve_product(load_document(FEED), "PC").name == "PyCharm"

    def test_malformed_entry_fails(self):
        """Test that the selected entry is built strictly."""
        with pytest.raises(MalformedDocumentError, match="channel@id missing"):
            resolve_product(load_document(FEED), "BR")

    def test_uses_supplied_builder(self):
        """Test that a pre-configured builder collects metrics."""
        builder = UpdateFeedBuilder("PC", os_suffix="win")
        resolve_product(load_document(FEED), "PC", builder=builder)

        assert builder.metrics.products_scanned == 3
        assert builder.metrics.channels_built == 1

    def test_idempotent(self):
        """Test that repeated parses give equal, independent value graphs."""
        root = load_document(FEED)

        first = resolve_product(root, "IU", os_suffix="unix")
        second = resolve_product(root, "IU", os_suffix="unix")

        assert first == second
        assert first is not second
        assert first.to_dict() == second.to_dict()
