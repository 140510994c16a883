"""Document sources that serve notes from a vault."""
from .base import DocumentSource, SourceError, SourceListError, SourceReadError, in_folder
from .filesystem import VaultDirectorySource
from .rest_api import LocalRestApiSource

__all__ = [
    "DocumentSource",
    "LocalRestApiSource",
    "SourceError",
    "SourceListError",
    "SourceReadError",
    "VaultDirectorySource",
    "in_folder",
]
