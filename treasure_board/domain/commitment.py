"""Commit-reveal helpers.

A creator publishes ``digest(solution)`` when the board is created and the
plain solution when it is revealed. The solution is a byte string: the bomb
slot indices first, then any salt bytes.
"""

import hashlib
import secrets
from typing import Callable, Iterable

HashProvider = Callable[[bytes], bytes]

DIGEST_SIZE = hashlib.sha256().digest_size


def sha256_digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def solution_bytes(values: Iterable[int]) -> bytes:
    """Pack integers 0..255 into a solution byte string."""
    return bytes(values)


def commitment_for(solution: bytes, hash_provider: HashProvider = sha256_digest) -> bytes:
    return hash_provider(solution)


def verify_commitment(
    solution: bytes, commitment: bytes, hash_provider: HashProvider = sha256_digest
) -> bool:
    """Return True if ``solution`` hashes to exactly ``commitment``."""
    return secrets.compare_digest(hash_provider(solution), commitment)
