"""The indexify command tree.

One module per resource group. Each group is a composite holding a selector
over its leaf commands; the root selects between the groups.
"""

from __future__ import annotations

from indexify_cli.commands.content import (
    Content,
    ContentCmd,
    ContentDelete,
    ContentDownload,
    ContentGet,
    ContentList,
    ContentUpload,
)
from indexify_cli.commands.extractor import Extractor, ExtractorCmd, ExtractorList
from indexify_cli.commands.graph import (
    Graph,
    GraphCmd,
    GraphCreate,
    GraphGet,
    GraphList,
)
from indexify_cli.commands.index import Index, IndexCmd, IndexList
from indexify_cli.commands.namespace import (
    Namespace,
    NamespaceCmd,
    NamespaceCreate,
    NamespaceGet,
    NamespaceList,
)
from indexify_cli.commands.root import Root, RootCmd

__all__ = [
    "Root",
    "RootCmd",
    "Content",
    "ContentCmd",
    "ContentDelete",
    "ContentDownload",
    "ContentGet",
    "ContentList",
    "ContentUpload",
    "Extractor",
    "ExtractorCmd",
    "ExtractorList",
    "Graph",
    "GraphCmd",
    "GraphCreate",
    "GraphGet",
    "GraphList",
    "Index",
    "IndexCmd",
    "IndexList",
    "Namespace",
    "NamespaceCmd",
    "NamespaceCreate",
    "NamespaceGet",
    "NamespaceList",
]
