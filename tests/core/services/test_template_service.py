from unittest.mock import patch

import pytest

from ooxml_templater.core.container import extract_container
from ooxml_templater.core.discovery.ordering import build_priority_map
from ooxml_templater.core.exceptions import ContainerExtractionError, TemplateNotFoundError
from ooxml_templater.core.fetch import MIME_TYPES
from ooxml_templater.core.services import TemplateService


@pytest.fixture
def service():
    return TemplateService()


class TestDiscover:
    def test_processing_order(self, service, docx_bytes):
        records = service.discover(extract_container(docx_bytes))

        assert [r.path for r in records] == [
            "word/document.xml",
            "word/charts/chart1.xml",
            "_rels/.rels",
            "word/header1.xml",
            "[Content_Types].xml",
        ]
        assert records[1].is_embedded is True

    def test_priority_from_user_config(self, isolated_config, docx_bytes):
        (isolated_config / "processing_order.yml").write_text(
            "category_order:\n  - [headerFooter]\n  - [content]\n", encoding="utf-8"
        )
        records = TemplateService().discover(extract_container(docx_bytes))

        assert [r.path for r in records][:2] == ["word/header1.xml", "word/document.xml"]

    def test_explicit_priority(self, docx_bytes):
        service = TemplateService(priority=build_priority_map([["relationships"]]))
        records = service.discover(extract_container(docx_bytes))

        assert records[0].path == "_rels/.rels"


class TestAnalyze:
    def test_analysis_per_record(self, service, docx_bytes):
        analyses = service.analyze(service.discover(extract_container(docx_bytes)))
        by_path = {a.record.path: a for a in analyses}

        document = by_path["word/document.xml"]
        assert document.has_placeholders is True
        assert document.analysis.text_content == "Dear (((customer.name))), (((DeletePageIfEmpty=optional.notes)))"
        assert document.analysis.xml_structure.elements[:3] == ["document", "body", "p"]
        assert by_path["_rels/.rels"].has_placeholders is False

    def test_agrees_with_placeholder_parser(self, service, zip_builder):
        container = extract_container(
            zip_builder({"word/document.xml": '<w:t>(((x-y=z)))</w:t><w:p w:rsid="(((my.field=x)))"/>'})
        )
        records = service.discover(container)

        (analysis,) = service.analyze(records)
        parsed = service.parser.parse_document(records)

        assert parsed.summary.total_placeholders == 2
        assert analysis.has_placeholders is True
        assert [a.name for a in analysis.analysis.xml_structure.attributes] == ["rsid"]


class TestCandidatePaths:
    def test_word_candidates(self, service, docx_bytes):
        container = extract_container(docx_bytes)

        assert service.candidate_paths(container, "docx") == ["word/document.xml", "word/header1.xml"]
        assert service.candidate_paths(container, "word") == ["word/document.xml", "word/header1.xml"]

    def test_unknown_type_uses_embedded_patterns(self, service, zip_builder):
        container = extract_container(
            zip_builder({"word/document.xml": "<w:document/>", "xl/charts/chart1.xml": "<c:chartSpace/>"})
        )

        assert service.candidate_paths(container, "unknown") == ["xl/charts/chart1.xml"]


class TestParseTemplate:
    def test_parse_bytes(self, service, docx_bytes):
        result = service.parse_bytes(docx_bytes, filename="letter.docx")

        assert result.template.type == "docx"
        assert result.template.mime_type == MIME_TYPES["docx"]
        assert result.template.filename == "letter.docx"
        assert result.xml_file_count == 5
        assert result.unique_placeholders == ["customer.name", "optional.notes", "sales.q1", "report.title"]
        assert result.placeholders.summary.delete_directive_count == 1
        assert result.placeholders.summary.numeric_directive_count == 1
        assert result.parsed_at

    def test_parse_bytes_without_filename(self, service, docx_bytes):
        result = service.parse_bytes(docx_bytes)

        assert result.template.type == "unknown"
        assert result.template.filename == ""

    def test_parse_local_template(self, service, docx_bytes, tmp_path):
        path = tmp_path / "letter.docx"
        path.write_bytes(docx_bytes)

        result = service.parse_template(path)

        assert result.template.source == str(path)
        assert "customer.name" in result.unique_placeholders

    def test_parse_remote_template(self, service, docx_bytes):
        with patch("ooxml_templater.core.services.template_service.fetch_template", return_value=docx_bytes) as fetch:
            result = service.parse_template("https://example.com/letter.docx?v=1")

        fetch.assert_called_once_with("https://example.com/letter.docx?v=1")
        assert result.template.filename == "letter.docx"

    def test_errors_propagate(self, service, tmp_path):
        with pytest.raises(TemplateNotFoundError):
            service.parse_template(tmp_path / "missing.docx")

        bogus = tmp_path / "bogus.docx"
        bogus.write_bytes(b"plain text")
        with pytest.raises(ContainerExtractionError):
            service.parse_template(bogus)
