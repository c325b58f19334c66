"""Resource descriptors for the indexify HTTP API.

A descriptor says where a kind of object lives and how the service wraps it:

    NAMESPACES.segments("docs")   -> ["namespaces", "docs"]
    CONTENT.segments(None)        -> ["content"]   (under namespaces/{ns}/)

Namespaced resources are prefixed with ``namespaces/{namespace}`` by the
client. Resources that cannot be addressed by ID reject one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from indexify_cli.api import models
from indexify_cli.core.exceptions import ValidationError


@dataclass(frozen=True)
class Resource:
    """Location and envelope shapes of one API resource.

    Attributes:
        name: Name used in error messages
        path: Collection path segment
        namespaced: Whether the resource lives under namespaces/{ns}
        addressable: Whether an ID may follow the collection path
        requires_id: Whether an ID must follow the collection path
        suffix: Segments appended after the ID
        list_envelope: (model, field) wrapping list responses
        get_envelope: (model, field) wrapping get responses
        create_response: Type returned by create
        delete_response: Type returned by delete
    """

    name: str
    path: str
    namespaced: bool = True
    addressable: bool = True
    requires_id: bool = False
    suffix: Tuple[str, ...] = ()
    list_envelope: Optional[Tuple[type, str]] = None
    get_envelope: Optional[Tuple[type, str]] = None
    create_response: Any = None
    delete_response: Any = None

    def segments(self, id: Optional[str] = None) -> List[str]:
        """Path segments below the service root (and namespace prefix)."""
        if id is None:
            if self.requires_id:
                raise ValidationError(f"Cannot access {self.name} without an ID.")
            return [self.path]

        if not self.addressable:
            raise ValidationError(f"{self.name} does not support getting by ID.")
        return [self.path, id, *self.suffix]


NAMESPACES = Resource(
    name="DataNamespace",
    path="namespaces",
    namespaced=False,
    list_envelope=(models.ListNamespacesResponse, "namespaces"),
    get_envelope=(models.GetNamespaceResponse, "namespace"),
    create_response=Dict[str, str],
)

EXTRACTORS = Resource(
    name="ExtractorDescription",
    path="extractors",
    namespaced=False,
    addressable=False,
    list_envelope=(models.ListExtractorsResponse, "extractors"),
)

EXTRACTION_GRAPHS = Resource(
    name="ExtractionGraph",
    path="extraction_graphs",
    addressable=False,
    create_response=models.ExtractionGraphResponse,
)

INDEXES = Resource(
    name="Index",
    path="indexes",
    addressable=False,
    list_envelope=(models.ListIndexesResponse, "indexes"),
)

CONTENT = Resource(
    name="ContentMetadata",
    path="content",
    list_envelope=(models.ListContentResponse, "content_list"),
    get_envelope=(models.GetContentMetadataResponse, "content_metadata"),
    delete_response=Dict[str, str],
)

UPLOAD = Resource(name="ContentUpload", path="upload_file", addressable=False)

DOWNLOAD = Resource(
    name="Download", path="content", requires_id=True, suffix=("download",)
)
