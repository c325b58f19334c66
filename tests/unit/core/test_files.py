"""
Tests for typed file inputs (JSON and YAML definitions).
"""

from pathlib import Path

import pytest

from indexify_cli.api.models import CreateNamespace, ExtractionGraph
from indexify_cli.core.exceptions import DeserializationError, ValidationError
from indexify_cli.core.files import guess_mime_type, load_file

GRAPH_YAML = """\
name: summarize
description: Summaries of every document
extraction_policies:
  - extractor: tensorlake/summarize
    name: summary
    filters_eq: "lang:en,year:2024"
"""

GRAPH_JSON = """\
{"name": "embed", "namespace": "research", "extraction_policies": []}
"""


class TestGuessMimeType:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("graph.json", "application/json"),
            ("graph.JSON", "application/json"),
        ],
    )
    def test_json(self, name, expected):
        assert guess_mime_type(Path(name)) == expected

    @pytest.mark.parametrize("name", ["graph.yaml", "graph.yml"])
    def test_yaml(self, name):
        assert guess_mime_type(Path(name)).endswith("yaml")

    def test_unknown(self):
        assert guess_mime_type(Path("graph")) is None


class TestLoadFile:
    def test_yaml_graph(self, write_file):
        graph = load_file(write_file("graph.yaml", GRAPH_YAML), ExtractionGraph)

        assert graph.name == "summarize"
        assert graph.namespace == ""
        policy = graph.extraction_policies[0]
        assert policy.extractor == "tensorlake/summarize"
        assert policy.filters_eq == {"lang": "en", "year": 2024}

    def test_json_graph(self, write_file):
        graph = load_file(write_file("graph.json", GRAPH_JSON), ExtractionGraph)
        assert graph.name == "embed"
        assert graph.namespace == "research"

    def test_namespace_definition(self, write_file):
        path = write_file("ns.yml", "name: research\nlabels:\n  team: search\n")
        namespace = load_file(path, CreateNamespace)
        assert namespace.name == "research"
        assert namespace.labels == {"team": "search"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Cannot read"):
            load_file(tmp_path / "missing.json", ExtractionGraph)

    def test_undetected_type(self, write_file):
        path = write_file("graph", "name: x")
        with pytest.raises(ValidationError, match="MIME type not detected"):
            load_file(path, ExtractionGraph)

    def test_unsupported_type(self, write_file):
        path = write_file("graph.txt", "name: x")
        with pytest.raises(ValidationError, match="Unsupported file type: plain"):
            load_file(path, ExtractionGraph)

    def test_invalid_json(self, write_file):
        path = write_file("graph.json", '{"name": ')
        with pytest.raises(DeserializationError, match="Invalid JSON"):
            load_file(path, ExtractionGraph)

    def test_invalid_yaml(self, write_file):
        path = write_file("graph.yaml", "name: [unclosed")
        with pytest.raises(DeserializationError, match="Invalid YAML"):
            load_file(path, ExtractionGraph)

    def test_validation_error_has_field_path(self, write_file):
        """Model errors name the offending field and attach the file content."""
        content = "name: g\nextraction_policies:\n  - name: p\n"
        path = write_file("graph.yaml", content)

        with pytest.raises(DeserializationError) as exc_info:
            load_file(path, ExtractionGraph)

        assert exc_info.value.path == "extraction_policies.0.extractor"
        assert ("Body:", content) in exc_info.value.sections

    def test_bad_label_filter_reported(self, write_file):
        content = (
            "name: g\nextraction_policies:\n"
            "  - name: p\n    extractor: e\n    filters_eq: 'nocolon'\n"
        )
        path = write_file("graph.yaml", content)

        with pytest.raises(DeserializationError) as exc_info:
            load_file(path, ExtractionGraph)

        assert exc_info.value.path == "extraction_policies.0.filters_eq"
