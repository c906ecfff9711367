"""Host capabilities the collector relies on, and a local filesystem host."""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path
from typing import List, Optional, Protocol

from gistkit.libs.config_loader import ConfigType, get_config

from .ignore import FileTypeIgnorePolicy, GitIgnorePolicy

LOG = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

# Longest BOMs first: the UTF-32 LE BOM starts with the UTF-16 LE one
_BOMS = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


class HostEnvironment(Protocol):
    """File and ignore-rule access supplied by whoever runs the collector."""

    def read_file_bytes(self, path: Path) -> bytes:
        ...

    def detect_encoding(self, path: Path) -> str:
        ...

    def list_children(self, path: Path) -> List[Path]:
        ...

    def is_directory(self, path: Path) -> bool:
        ...

    def simple_name(self, path: Path) -> str:
        ...

    def real_path(self, path: Path) -> Path:
        ...

    def is_ignored_by_vcs(self, path: Path) -> bool:
        ...

    def is_ignored_by_file_type(self, path: Path) -> bool:
        ...


def detect_bom_encoding(head: bytes, default: str = DEFAULT_ENCODING) -> str:
    """Return the codec named by a byte-order mark, or ``default``."""
    for bom, encoding in _BOMS:
        if head.startswith(bom):
            return encoding
    return default


class LocalHost:
    """HostEnvironment backed by the local filesystem and git.

    Directory children are listed sorted by name so that repeated
    collections of the same tree produce the same blob order.
    """

    def __init__(
        self,
        default_encoding: str = DEFAULT_ENCODING,
        file_type_policy: Optional[FileTypeIgnorePolicy] = None,
        vcs_policy: Optional[GitIgnorePolicy] = None,
    ) -> None:
        self.default_encoding = default_encoding
        self.file_type_policy = file_type_policy or FileTypeIgnorePolicy()
        self.vcs_policy = vcs_policy or GitIgnorePolicy()

    @classmethod
    def create_from_config(cls, config: ConfigType) -> "LocalHost":
        """Build a host from the ``collector`` section of the configuration."""
        collector_config = get_config("collector", config, {})
        patterns = get_config("ignored_patterns", collector_config, None)
        return cls(
            default_encoding=get_config("default_encoding", collector_config, DEFAULT_ENCODING),
            file_type_policy=FileTypeIgnorePolicy(patterns),
            vcs_policy=GitIgnorePolicy(enabled=get_config("use_vcs_ignore", collector_config, True)),
        )

    def read_file_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def detect_encoding(self, path: Path) -> str:
        with open(path, "rb") as f:
            head = f.read(4)
        return detect_bom_encoding(head, self.default_encoding)

    def list_children(self, path: Path) -> List[Path]:
        return sorted(Path(path).iterdir(), key=lambda child: child.name)

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def simple_name(self, path: Path) -> str:
        # "." and ".." have no name of their own
        return Path(os.path.abspath(path)).name

    def real_path(self, path: Path) -> Path:
        return Path(path).resolve()

    def is_ignored_by_vcs(self, path: Path) -> bool:
        return self.vcs_policy.is_ignored(path)

    def is_ignored_by_file_type(self, path: Path) -> bool:
        return self.file_type_policy.is_ignored(path)
