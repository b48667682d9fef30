"""
Tests pour le module core.epub.metadata_extractors.
"""

from unittest.mock import patch

from epub_pager.core.epub.metadata_extractors import detect_language_from_text, find_isbn


class TestFindIsbn:
    """Tests pour find_isbn."""

    def test_isbn_in_urn(self):
        assert find_isbn(["uuid:1234", "urn:isbn:9780306406157"]) == "9780306406157"

    def test_hyphenated_isbn(self):
        assert find_isbn(["ISBN 978-0-306-40615-7"]) == "9780306406157"

    def test_no_valid_isbn(self):
        assert find_isbn(["urn:uuid:0f3c2b1a", "9780306406158"]) is None
        assert find_isbn([]) is None


class TestDetectLanguage:
    """Tests pour detect_language_from_text."""

    def test_empty_document(self):
        assert detect_language_from_text("<html><body>  </body></html>") is None

    @patch("epub_pager.core.epub.metadata_extractors.detect", return_value="fr")
    def test_markup_is_stripped_before_detection(self, mock_detect):
        result = detect_language_from_text("<p>Il était une fois</p>")

        assert result == "fr"
        mock_detect.assert_called_once_with("Il était une fois")
