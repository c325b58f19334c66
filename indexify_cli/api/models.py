"""
Pydantic models for the indexify service API.

Response envelopes (``List*Response``, ``Get*Response``) mirror the JSON the
service returns; the client unwraps them so commands only see records.

Records shown in tables subclass ``Record`` and list their table columns in
``table_columns``. Columns holding lists render one sorted entry per line.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from indexify_cli.api.labels import check_labels_eq, parse_labels_eq
from indexify_cli.core.exceptions import ValidationError


def display_value(value: Any) -> str:
    """Render one table cell."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(sorted(display_value(v) for v in value))
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class Record(BaseModel):
    """Base for records rendered by the output module."""

    model_config = ConfigDict(extra="ignore")

    table_columns: ClassVar[Tuple[str, ...]] = ()

    def table_row(self) -> List[str]:
        """Cell values in ``table_columns`` order."""
        return [display_value(getattr(self, column)) for column in self.table_columns]


class IndexDistance(str, Enum):
    """Distance metric of an embedding index."""

    DOT = "dot"
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"

    def __str__(self) -> str:
        return self.value


class EmbeddingSchema(BaseModel):
    dim: int
    distance: IndexDistance = IndexDistance.DOT

    def __str__(self) -> str:
        return f"{self.dim}-{self.distance}"


class ExtractorOutputSchema(BaseModel):
    """One output of an extractor: either an embedding or a metadata schema."""

    embedding: Optional[EmbeddingSchema] = None
    metadata: Optional[Any] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "ExtractorOutputSchema":
        if (self.embedding is None) == (self.metadata is None):
            raise ValueError("must be exactly one of 'embedding' or 'metadata'")
        return self

    def __str__(self) -> str:
        return "embedding" if self.embedding is not None else "metadata"


class ExtractionPolicy(Record):
    table_columns = (
        "id",
        "extractor",
        "name",
        "input_params",
        "content_source",
        "graph_name",
    )

    id: str = ""
    extractor: str
    name: str
    filters_eq: Optional[Dict[str, Any]] = None
    input_params: Optional[Any] = None
    content_source: Optional[str] = None
    graph_name: str = ""

    @field_validator("filters_eq", mode="before")
    @classmethod
    def _parse_filters_eq(cls, value: Any) -> Optional[Dict[str, Any]]:
        if value is not None and not isinstance(value, (str, dict)):
            raise ValueError("labels_eq filter must be a string like 'key:value'")
        try:
            # Already parsed, e.g. a policy read back from JSON output
            if isinstance(value, dict):
                return check_labels_eq(value)
            return parse_labels_eq(value)
        except ValidationError as e:
            raise ValueError(str(e)) from e

    def __str__(self) -> str:
        return self.name


class ExtractionGraph(Record):
    table_columns = ("name", "description", "extraction_policies")

    id: str = ""
    name: str
    namespace: str = ""
    description: Optional[str] = None
    extraction_policies: List[ExtractionPolicy] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.name


class ExtractionGraphResponse(Record):
    table_columns = ("indexes",)

    indexes: List[str] = Field(default_factory=list)


class DataNamespace(Record):
    table_columns = ("name", "extraction_graphs")

    name: str
    extraction_graphs: List[ExtractionGraph] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.name


class CreateNamespace(BaseModel):
    name: str = ""
    extraction_graphs: List[ExtractionGraph] = Field(default_factory=list)
    labels: Dict[str, str] = Field(default_factory=dict)


class ListNamespacesResponse(BaseModel):
    namespaces: List[DataNamespace]


class GetNamespaceResponse(BaseModel):
    namespace: DataNamespace


class ExtractorDescription(Record):
    table_columns = ("name", "input_mime_types", "description")

    name: str
    input_mime_types: List[str] = Field(default_factory=list)
    description: str = ""
    input_params: Any = None
    outputs: Dict[str, ExtractorOutputSchema] = Field(default_factory=dict)


class ListExtractorsResponse(BaseModel):
    extractors: List[ExtractorDescription] = Field(default_factory=list)


class Index(Record):
    table_columns = ("name", "embedding_schema")

    name: str
    embedding_schema: EmbeddingSchema


class ListIndexesResponse(BaseModel):
    indexes: List[Index]


class ContentMetadata(Record):
    table_columns = (
        "id",
        "name",
        "mime_type",
        "extraction_graph_names",
        "created_at",
        "source",
        "size",
    )

    id: str
    parent_id: str = ""
    root_content_id: str = ""
    namespace: str = ""
    name: str = ""
    mime_type: str = ""
    labels: Dict[str, Any] = Field(default_factory=dict)
    extraction_graph_names: List[str] = Field(default_factory=list)
    storage_url: str = ""
    created_at: int = 0
    source: str = ""
    size: int = 0
    hash: str = ""


class ListContentResponse(BaseModel):
    content_list: List[ContentMetadata] = Field(default_factory=list)
    total: int = 0


class GetContentMetadataResponse(BaseModel):
    content_metadata: ContentMetadata


class ContentIds(BaseModel):
    """Request body for deleting content."""

    content_ids: List[str]
