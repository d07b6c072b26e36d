"""
Pipelines that turn editor state into API requests.
"""

from profile_editor.pipelines.payload import build_update_request

__all__ = ["build_update_request"]
