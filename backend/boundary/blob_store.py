"""
Blob store capability interface.

Any object storage backend used by the services must satisfy this protocol.
Implementations raise only taxonomy errors (StoreUnavailable, NotFound).

Dependencies: None
System role: Blob store contract
"""

from datetime import datetime
from typing import Protocol


class BlobStore(Protocol):
    """Path-addressable binary storage."""

    def upload(
        self,
        blob_path: str,
        data: bytes,
        content_type: str,
        is_public: bool = False,
    ) -> None:
        """Store ``data`` under ``blob_path``, readable by anyone when ``is_public``."""
        ...

    def set_visibility(self, blob_path: str, is_public: bool) -> None:
        """Make an existing object publicly readable, or private again."""
        ...

    def download(self, blob_path: str) -> bytes:
        """Return the bytes stored under ``blob_path``."""
        ...

    def delete(self, blob_path: str) -> None:
        """Remove ``blob_path``; deleting a missing object is not an error."""
        ...

    def public_url(self, blob_path: str) -> str:
        """Durable URL for a publicly readable object."""
        ...

    def signed_url(self, blob_path: str, expires_in: int) -> tuple[str, datetime]:
        """Time-bounded read URL and its expiry."""
        ...
