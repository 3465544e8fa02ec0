"""API key generation and salted hashing."""

from __future__ import annotations

import hashlib
import uuid
from abc import ABC, abstractmethod

API_KEY_PREFIX = "pk_"


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class ApiKeyHasher:
    """Stored form of an API key is hex(sha256(key + salt))."""

    def __init__(self, salt: str, algorithm: HashAlgorithm | None = None) -> None:
        if not salt:
            raise ValueError("API key salt must not be empty")
        self._salt = salt
        self.algorithm = algorithm or SHA256Algorithm()

    def hash(self, plaintext: str) -> str:
        return self.algorithm.hash(plaintext + self._salt)

    @staticmethod
    def generate_key() -> str:
        """Return a new plaintext key: pk_ followed by 32 hex chars."""
        return f"{API_KEY_PREFIX}{uuid.uuid4().hex}"
