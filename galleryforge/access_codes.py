"""
Access codes - One-way hashing of album unlock codes and the master code.

The viewer hashes the code a visitor types with Web Crypto SHA-256 and
compares lowercase hex digests, so the encoding here must match exactly.
"""

import hashlib
from typing import Optional


def hash_access_code(code: str) -> str:
    """Return the SHA-256 hex digest of the UTF-8 encoded code."""
    return hashlib.sha256(code.encode('utf-8')).hexdigest()


def hash_optional_code(code: Optional[str]) -> Optional[str]:
    """Hash a code if one is set. Empty strings count as unset."""
    if not code:
        return None
    return hash_access_code(code)
