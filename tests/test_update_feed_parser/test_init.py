"""Test module for update_feed_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import update_feed_parser

    # Assert
    assert update_feed_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import update_feed_parser

    # Assert
    assert isinstance(update_feed_parser.__version__, str)
    assert update_feed_parser.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import update_feed_parser

    # Assert
    assert update_feed_parser.__author__ == "Update Feed Parser Team"


def test_package_all_exports_resolve() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import update_feed_parser

    # Assert
    for name in update_feed_parser.__all__:
        assert hasattr(update_feed_parser, name), name
    assert "parse_update_data" in update_feed_parser.__all__
    assert "UpdateFeedParser" in update_feed_parser.__all__
