"""Pydantic models for gist creation requests and results."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class GistOptions(BaseModel):
    """What the user chose before creating a gist."""
    description: str = Field(default="", description="Gist description shown on GitHub")
    is_private: bool = Field(default=False, description="Create a secret gist instead of a public one")
    anonymous: bool = Field(default=False, description="Post without a GitHub token")
    open_in_browser: bool = Field(default=False, description="Open the created gist in a web browser")


class GistRequest(BaseModel):
    """A prepared Gist API request body plus what went into it."""
    payload: Dict[str, Any] = Field(description="JSON body for POST /gists")
    files: List[str] = Field(description="Blob names in collection order (may repeat)")
    unreadable_files: List[str] = Field(
        default_factory=list,
        description="Files skipped because they couldn't be read"
    )


class GistResult(BaseModel):
    """Outcome of a successful gist creation."""
    url: str = Field(description="html_url of the created gist")
    files: List[str] = Field(description="Blob names that were uploaded")
    unreadable_files: List[str] = Field(default_factory=list)
    opened_in_browser: bool = False
    warning: Optional[str] = Field(
        default=None,
        description="Set when some selected files were skipped"
    )
