"""
Blob path utilities.

Filename sanitization and owner-scoped blob path generation for uploads.

Dependencies: None
System role: Collision-free, traversal-safe object keys
"""

import re
import time
import uuid

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")
_DEFAULT_NAME = "document.pdf"
MAX_NAME_LENGTH = 200


def truncate_filename(filename: str, max_length: int) -> str:
    """
    Shorten a filename to ``max_length`` characters, keeping its extension.

    Args:
        filename: Name to shorten
        max_length: Maximum length of the result

    Returns:
        str: ``filename`` unchanged when it already fits
    """
    if len(filename) <= max_length:
        return filename
    stem, dot, extension = filename.rpartition(".")
    if dot and stem and len(extension) < max_length // 2:
        return stem[: max_length - len(extension) - 1] + "." + extension
    return filename[:max_length]


def sanitize_filename(filename: str) -> str:
    """
    Strip every character outside ``[A-Za-z0-9.-]``.

    Slashes and backslashes are removed with everything else, so the result
    can never climb out of the owner prefix. Leading dots are dropped to avoid
    hidden or relative names. Long names are cut to ``MAX_NAME_LENGTH``
    characters with the extension preserved.

    Args:
        filename: Original filename from the client

    Returns:
        str: Sanitized name, ``document.pdf`` if nothing usable remains
    """
    safe = _UNSAFE_CHARS.sub("", filename or "").lstrip(".")
    return truncate_filename(safe, MAX_NAME_LENGTH) or _DEFAULT_NAME


def generate_blob_path(owner_id: uuid.UUID | str, filename: str) -> str:
    """
    Generate a unique blob path inside the owner's namespace.

    Format: {owner_id}/{epoch_millis}-{8 hex}-{sanitized_name}

    Args:
        owner_id: Uploading identity
        filename: Original filename

    Returns:
        str: Blob path
    """
    timestamp = int(time.time() * 1000)
    unique_id = uuid.uuid4().hex[:8]
    return f"{owner_id}/{timestamp}-{unique_id}-{sanitize_filename(filename)}"
