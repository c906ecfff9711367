"""Data models for content collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from gistkit.libs.errors import UnreadableFileError


@dataclass(frozen=True)
class NamedBlob:
    """A named unit of text content destined for upload."""

    name: str
    text: str

    def __str__(self) -> str:
        return self.name


class EditorState(Protocol):
    """Read access to an open editor, supplied by the host."""

    file_name_hint: Optional[str]

    def read_selected_text(self) -> Optional[str]:
        ...

    def read_document_text(self) -> str:
        ...


@dataclass(frozen=True)
class EditorSelection:
    """
    Content taken from an open editor.

    ``text`` is the active selection (``None`` when nothing is selected) and
    ``document_text`` is the full document, used when the selection is empty.
    """

    text: Optional[str]
    file_name_hint: Optional[str] = None
    document_text: str = ""

    @classmethod
    def from_editor(cls, editor: EditorState) -> "EditorSelection":
        return cls(
            text=editor.read_selected_text(),
            file_name_hint=editor.file_name_hint,
            document_text=editor.read_document_text(),
        )

    @property
    def file_name(self) -> str:
        if not self.file_name_hint:
            return ""
        return PurePath(self.file_name_hint).name


@dataclass(frozen=True)
class SingleFile:
    """One file or directory chosen by the user."""

    path: Path


@dataclass(frozen=True)
class FileList:
    """Several files and/or directories, in the order the user chose them."""

    paths: Tuple[Path, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, paths: Iterable[Union[str, Path]]) -> "FileList":
        return cls(tuple(Path(p) for p in paths))


SelectionSource = Union[EditorSelection, SingleFile, FileList]


@dataclass
class CollectionReport:
    """Diagnostics gathered during a single collection run."""

    unreadable_files: List[UnreadableFileError] = field(default_factory=list)

    def record_unreadable(self, path: Path, cause: BaseException) -> None:
        self.unreadable_files.append(UnreadableFileError(path, cause))

    @property
    def has_errors(self) -> bool:
        return bool(self.unreadable_files)
