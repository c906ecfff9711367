"""Build the JSON body for the Gist API."""

import json
from typing import Any, Dict, Sequence

from gistkit.libs.content_collector import NamedBlob


def prepare_gist_request(description: str,
                         is_private: bool,
                         blobs: Sequence[NamedBlob]) -> Dict[str, Any]:
    """
    Build the request body for POST /gists.

    Blobs are keyed by name, so a later blob replaces an earlier one with
    the same name. ``public`` is sent as the string "true" or "false".

    Args:
        description: Gist description
        is_private: Whether the gist should be secret
        blobs: Collected blobs, in upload order

    Returns:
        JSON-serializable request body
    """
    files = {}
    for blob in blobs:
        files[blob.name] = {'content': blob.text}

    return {
        'description': description,
        'public': str(not is_private).lower(),
        'files': files,
    }


def dump_gist_request(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)
