"""
ID generator for Riskwell.

Generates UUIDs and human-readable policy and claim numbers. Seeding the
generator makes numbering reproducible in tests and batch runs.
"""

from uuid import UUID

import numpy as np
from numpy.random import Generator as RNG


class IDGenerator:
    """
    Generates unique identifiers for policies and claims.

    Numbers carry a sequential counter plus a random suffix so that two
    generators started independently are unlikely to collide.

    Usage:
        id_gen = IDGenerator(np.random.default_rng(42), prefix_year=2024)
        policy_id = id_gen.generate_uuid()
        policy_number = id_gen.generate_policy_number()
        claim_number = id_gen.generate_claim_number()
    """

    def __init__(self, rng: RNG | None = None, prefix_year: int = 2024):
        """
        Initialize the ID generator.

        Args:
            rng: NumPy random number generator (fresh unseeded one if None)
            prefix_year: Year to use in number prefixes
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.prefix_year = prefix_year

        self._policy_counter = 0
        self._claim_counter = 0

    @classmethod
    def from_seed(cls, seed: int | None, prefix_year: int = 2024) -> "IDGenerator":
        """Build a generator from an optional integer seed."""
        return cls(np.random.default_rng(seed), prefix_year=prefix_year)

    def generate_uuid(self) -> UUID:
        """
        Generate a random UUID.

        Uses the RNG for reproducibility.

        Returns:
            Random UUID
        """
        random_bytes = bytearray(self.rng.bytes(16))
        # Set version 4 (random) UUID bits
        random_bytes[6] = (random_bytes[6] & 0x0F) | 0x40
        random_bytes[8] = (random_bytes[8] & 0x3F) | 0x80
        return UUID(bytes=bytes(random_bytes))

    def generate_policy_number(self) -> str:
        """
        Generate a unique policy number.

        Format: POL-YYYY-NNNNNN-RRRR

        Returns:
            Policy number string
        """
        self._policy_counter += 1
        return f"POL-{self.prefix_year}-{self._policy_counter:06d}-{self._suffix()}"

    def generate_claim_number(self) -> str:
        """
        Generate a unique claim number.

        Format: CLM-YYYY-NNNNNN-RRRR

        Returns:
            Claim number string
        """
        self._claim_counter += 1
        return f"CLM-{self.prefix_year}-{self._claim_counter:06d}-{self._suffix()}"

    def _suffix(self) -> str:
        return f"{int(self.rng.integers(1000, 10000)):04d}"
