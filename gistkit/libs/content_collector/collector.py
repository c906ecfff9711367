"""Collect editor and file content into named blobs for a gist upload."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional

from tqdm import tqdm

from gistkit.libs.errors import SelectionError

from .host import HostEnvironment, LocalHost
from .models import EditorSelection, FileList, NamedBlob, SelectionSource, SingleFile

LOG = logging.getLogger(__name__)

UnreadableFileSink = Callable[[Path, BaseException], None]

# Marks a directory boundary in flattened blob names (src/util/a.py -> src_util_a.py)
DIRECTORY_SEPARATOR = "_"


def is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def is_action_available(source: Optional[SelectionSource]) -> bool:
    """Whether a gist can be offered for ``source`` at all.

    An editor whose document is empty has nothing to share even if the
    user has made no selection.
    """
    if source is None:
        return False
    if isinstance(source, EditorSelection):
        return bool(source.text) or bool(source.document_text)
    if isinstance(source, FileList):
        return bool(source.paths)
    return isinstance(source, SingleFile)


class ContentCollector:
    """Turn a selection source into an ordered list of named blobs.

    The collector only reads. Files that fail to read are reported through
    ``on_unreadable_file`` and skipped; everything else in the batch is
    still collected.
    """

    def __init__(
        self,
        host: Optional[HostEnvironment] = None,
        on_unreadable_file: Optional[UnreadableFileSink] = None,
        show_progress: bool = False,
    ) -> None:
        self.host = host or LocalHost()
        self.on_unreadable_file = on_unreadable_file
        self.show_progress = show_progress

    def collect(self, source: SelectionSource) -> List[NamedBlob]:
        """Collect blobs for one user invocation.

        Raises:
            SelectionError: If ``source`` is not an editor selection, a
                single file, or a file list.
        """
        start_time = time.perf_counter()
        try:
            if isinstance(source, EditorSelection):
                blob = self.from_editor(source)
                return [] if blob is None else [blob]
            if isinstance(source, FileList):
                blobs: List[NamedBlob] = []
                for path in tqdm(source.paths, desc="Collecting files", disable=not self.show_progress):
                    blobs.extend(self.resolve(path))
                return blobs
            if isinstance(source, SingleFile):
                return self.resolve(source.path)
            raise SelectionError("File, files and editor can't be missing all at once")
        finally:
            LOG.debug("collect finished in %.1fms", (time.perf_counter() - start_time) * 1000)

    def from_editor(self, selection: EditorSelection) -> Optional[NamedBlob]:
        text = selection.text
        if not text:
            text = selection.document_text
        if is_blank(text):
            return None
        return NamedBlob(selection.file_name, text)

    def resolve(self, path: Path, name_prefix: Optional[str] = None) -> List[NamedBlob]:
        """Collect blobs for a file, or recursively for a directory.

        Blobs found under a directory are named after every directory on
        the way down, each followed by an underscore.
        """
        return self._resolve(Path(path), name_prefix, frozenset())

    def _resolve(self, path: Path, name_prefix: Optional[str], walking: FrozenSet[Path]) -> List[NamedBlob]:
        if self.host.is_directory(path):
            return self._resolve_directory(path, name_prefix, walking)

        content = self._read_file(path)
        if is_blank(content):
            return []
        name = (name_prefix or "") + self.host.simple_name(path)
        return [NamedBlob(name, content)]

    def _resolve_directory(self, directory: Path, name_prefix: Optional[str],
                           walking: FrozenSet[Path]) -> List[NamedBlob]:
        # A directory already on the way down was reached again through a symlink
        real_path = self.host.real_path(directory)
        if real_path in walking:
            LOG.debug(f"Skipping recursive directory link {directory}")
            return []
        walking = walking | {real_path}

        prefix = (name_prefix or "") + self.host.simple_name(directory) + DIRECTORY_SEPARATOR
        blobs: List[NamedBlob] = []
        for child in self.host.list_children(directory):
            if self.is_ignored(child):
                continue
            blobs.extend(self._resolve(child, prefix, walking))
        return blobs

    def is_ignored(self, path: Path) -> bool:
        return self.host.is_ignored_by_vcs(path) or self.host.is_ignored_by_file_type(path)

    def _read_file(self, path: Path) -> Optional[str]:
        try:
            data = self.host.read_file_bytes(path)
            encoding = self.host.detect_encoding(path)
            # Undecodable bytes are replaced, as an editor would show them
            return data.decode(encoding, errors="replace")
        except (OSError, LookupError) as e:
            LOG.warning(f"Couldn't read the contents of the file {path}: {e}")
            if self.on_unreadable_file is not None:
                self.on_unreadable_file(path, e)
            return None
