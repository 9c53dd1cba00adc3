import pytest

from ooxml_templater.core.discovery.file_patterns import (
    EMBEDDED_PATTERNS,
    get_file_patterns_for_type,
    match_pattern,
)


class TestGetFilePatternsForType:
    def test_word(self):
        patterns = get_file_patterns_for_type("word")

        assert "word/document.xml" in patterns
        assert "word/header*.xml" in patterns
        assert "word/footer*.xml" in patterns
        assert "word/embeddings/**/*.xml" in patterns

    def test_powerpoint(self):
        patterns = get_file_patterns_for_type("powerpoint")

        assert "ppt/slides/slide*.xml" in patterns
        assert "ppt/slideLayouts/slideLayout*.xml" in patterns
        assert "ppt/charts/chart*.xml" in patterns

    def test_excel(self):
        patterns = get_file_patterns_for_type("excel")

        assert "xl/worksheets/sheet*.xml" in patterns
        assert "xl/sharedStrings.xml" in patterns
        assert "xl/charts/chart*.xml" in patterns

    def test_type_specific_before_embedded_tail(self):
        patterns = get_file_patterns_for_type("word")

        assert patterns[0] == "word/document.xml"
        assert patterns[-len(EMBEDDED_PATTERNS):] == list(EMBEDDED_PATTERNS)

    def test_unknown_type_returns_only_tail(self):
        assert get_file_patterns_for_type("unknown") == list(EMBEDDED_PATTERNS)

    def test_returns_fresh_list(self):
        get_file_patterns_for_type("word").append("junk")

        assert "junk" not in get_file_patterns_for_type("word")


class TestMatchPattern:
    @pytest.mark.parametrize(
        "path, pattern, expected",
        [
            ("word/header1.xml", "word/header*.xml", True),
            ("word/document.xml", "word/document.xml", True),
            ("word/sub/header1.xml", "word/header*.xml", False),
            ("ppt/charts/chart12.xml", "ppt/charts/chart*.xml", True),
            ("word/embeddings/chart1.xml", "word/embeddings/**/*.xml", True),
            ("word/embeddings/a/b/c.xml", "word/embeddings/**/*.xml", True),
            ("word/embeddings/Book1.xlsx", "word/embeddings/**/*.xml", False),
            ("xl/sharedStrings.xml", "xl/sharedStrings.xml", True),
            ("xl/sharedStrings_xml", "xl/sharedStrings.xml", False),
        ],
    )
    def test_glob(self, path, pattern, expected):
        assert match_pattern(path, pattern) is expected
