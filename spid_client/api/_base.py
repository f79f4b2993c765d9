"""
Shared pieces of the endpoint binding layer.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """
    The two operations a binding needs from its HTTP client.

    Whatever ``get`` and ``post`` return is handed back to the caller as is,
    so an asynchronous transport yields awaitables from every binding.
    """

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> Any:
        ...

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        ...


def merge_params(*sources: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge mappings into a new dict. Later sources win on key collision.

    None sources are skipped.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


class ResourceAPI:
    """Base for resource groups: holds the transport and the default redirect URI."""

    def __init__(self, http: Transport, redirect_uri: Optional[str] = None):
        """
        Args:
            http: Transport exposing get/post
            redirect_uri: Used by operations whose redirect_uri is omitted
        """
        self._http = http
        self.redirect_uri = redirect_uri

    def _redirect_uri(self, redirect_uri: Optional[str]) -> Optional[str]:
        return self.redirect_uri if redirect_uri is None else redirect_uri
