# RepoSync Hashing Utilities
# Content hashing for folder identifiers and resource fingerprints

import hashlib


def content_hash(content: str | bytes, *, algorithm: str = "sha256", length: int | None = None) -> str:
    """
    Calculate hash of content.

    Args:
        content: String or bytes content.
        algorithm: Hash algorithm (default sha256).
        length: Optional number of leading hex characters to keep.

    Returns:
        Hex digest of hash.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    hasher = hashlib.new(algorithm)
    hasher.update(content)
    digest = hasher.hexdigest()
    if length is not None:
        return digest[:length]
    return digest
