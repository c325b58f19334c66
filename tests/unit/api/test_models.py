"""
Tests for API models: validation rules and table rows.
"""

import pydantic
import pytest

from indexify_cli.api.models import (
    ContentMetadata,
    DataNamespace,
    EmbeddingSchema,
    ExtractionGraph,
    ExtractionPolicy,
    ExtractorDescription,
    ExtractorOutputSchema,
    Index,
    IndexDistance,
    display_value,
)


class TestDisplayValue:
    def test_none_is_empty(self):
        assert display_value(None) == ""

    def test_lists_sorted_one_per_line(self):
        assert display_value(["b", "a", "c"]) == "a\nb\nc"

    def test_enum_uses_value(self):
        assert display_value(IndexDistance.COSINE) == "cosine"

    def test_models_use_str(self):
        assert display_value(EmbeddingSchema(dim=384)) == "384-dot"


class TestExtractorOutputSchema:
    def test_embedding(self):
        schema = ExtractorOutputSchema(embedding={"dim": 3, "distance": "cosine"})
        assert str(schema) == "embedding"
        assert schema.embedding.distance is IndexDistance.COSINE

    def test_metadata(self):
        assert str(ExtractorOutputSchema(metadata={"type": "object"})) == "metadata"

    @pytest.mark.parametrize(
        "data",
        [{}, {"embedding": {"dim": 3}, "metadata": {}}],
    )
    def test_exactly_one(self, data):
        with pytest.raises(pydantic.ValidationError, match="exactly one"):
            ExtractorOutputSchema(**data)

    def test_unknown_distance(self):
        with pytest.raises(pydantic.ValidationError):
            EmbeddingSchema(dim=3, distance="manhattan")


class TestExtractionPolicy:
    def test_filters_parsed(self):
        policy = ExtractionPolicy(extractor="e", name="p", filters_eq="lang:en")
        assert policy.filters_eq == {"lang": "en"}

    def test_filters_default_none(self):
        assert ExtractionPolicy(extractor="e", name="p").filters_eq is None

    def test_parsed_filters_accepted(self):
        policy = ExtractionPolicy(extractor="e", name="p", filters_eq={"n": 3})
        assert policy.filters_eq == {"n": 3}

    @pytest.mark.parametrize(
        "filters,reason",
        [
            ({"bad key!": "x"}, "key invalid"),
            ({"": "x"}, "key invalid"),
            ({"lang": "x y"}, "value invalid"),
            ({"lang": ["en"]}, "value invalid"),
            ({}, "at least one label"),
        ],
    )
    def test_parsed_filters_validated(self, filters, reason):
        """Mappings from definition files follow the same label rules."""
        with pytest.raises(pydantic.ValidationError, match=reason):
            ExtractionPolicy(extractor="e", name="p", filters_eq=filters)

    def test_parsed_filters_empty_value_allowed(self):
        policy = ExtractionPolicy(extractor="e", name="p", filters_eq={"lang": ""})
        assert policy.filters_eq == {"lang": ""}

    def test_invalid_filter(self):
        with pytest.raises(pydantic.ValidationError, match="duplicate key"):
            ExtractionPolicy(extractor="e", name="p", filters_eq="a:1,a:2")

    def test_invalid_filter_type(self):
        with pytest.raises(pydantic.ValidationError, match="must be a string"):
            ExtractionPolicy(extractor="e", name="p", filters_eq=3)


class TestTableRows:
    """Each record lists its columns and renders one cell per column."""

    def test_namespace_row(self):
        namespace = DataNamespace(
            name="default",
            extraction_graphs=[{"name": "b"}, {"name": "a"}],
        )
        assert DataNamespace.table_columns == ("name", "extraction_graphs")
        assert namespace.table_row() == ["default", "a\nb"]

    def test_graph_row(self):
        graph = ExtractionGraph(
            name="g",
            extraction_policies=[{"extractor": "e", "name": "p"}],
        )
        assert graph.table_row() == ["g", "", "p"]

    def test_index_row(self):
        index = Index(name="idx", embedding_schema={"dim": 8, "distance": "euclidean"})
        assert index.table_row() == ["idx", "8-euclidean"]

    def test_extractor_row(self):
        extractor = ExtractorDescription(
            name="tensorlake/minilm",
            input_mime_types=["text/plain", "application/pdf"],
            description="Embeddings",
            outputs={"embedding": {"embedding": {"dim": 384}}},
        )
        assert extractor.table_row() == [
            "tensorlake/minilm",
            "application/pdf\ntext/plain",
            "Embeddings",
        ]

    def test_content_row(self):
        content = ContentMetadata(
            id="c1",
            name="paper.pdf",
            mime_type="application/pdf",
            extraction_graph_names=["summarize"],
            created_at=1700000000,
            source="ingestion",
            size=1024,
        )
        assert content.table_row() == [
            "c1",
            "paper.pdf",
            "application/pdf",
            "summarize",
            "1700000000",
            "ingestion",
            "1024",
        ]

    def test_unknown_fields_ignored(self):
        """Fields added by newer services do not break decoding."""
        content = ContentMetadata(id="c1", future_field=True)
        assert not hasattr(content, "future_field")
