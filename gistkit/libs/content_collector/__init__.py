"""Content collection for multi-file gist uploads."""

from .collector import ContentCollector, is_action_available
from .host import HostEnvironment, LocalHost
from .models import (
    CollectionReport,
    EditorSelection,
    FileList,
    NamedBlob,
    SelectionSource,
    SingleFile,
)

__all__ = [
    "ContentCollector",
    "CollectionReport",
    "EditorSelection",
    "FileList",
    "HostEnvironment",
    "LocalHost",
    "NamedBlob",
    "SelectionSource",
    "SingleFile",
    "is_action_available",
]
