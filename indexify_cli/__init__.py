"""indexify-cli - Command-line client for the indexify extraction service.

This package provides the ``indexify`` executable for managing namespaces,
extraction graphs, extractors, indexes and content.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
