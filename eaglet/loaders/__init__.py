"""Document loaders."""

from .documents import JSONLoader, JSONLLoader, document_from_dict  # noqa: F401
