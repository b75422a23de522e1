"""
Prime factorization with a sieve-backed table of small primes.

The table is built once per sieve limit on first use and shared read-only
afterwards. Factorization is bounded: whatever is left after dividing out the
tabled primes is reported as `remainder` instead of being factored further.
"""
from __future__ import annotations
import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import numpy as np

from config import DEFAULT_PRIME_SIEVE_LIMIT
from expression import Integer

logger = logging.getLogger(__name__)

_tables: Dict[int, Tuple[int, ...]] = {}
_tables_lock = threading.Lock()


def calculate_primes(limit: int) -> List[int]:
    """Get all primes up to and including `limit`, ascending."""
    if limit < 2:
        return []
    # index i stands for the odd number 2*i + 3
    size = (limit - 1) // 2
    composite = np.zeros(size, dtype=bool)
    for i in range(3, math.isqrt(limit) + 1, 2):
        if not composite[(i - 3) // 2]:
            composite[(i * i - 3) // 2::i] = True
    odd_primes = 2 * np.flatnonzero(~composite) + 3
    return [2] + odd_primes.tolist()


def factorization_primes(limit: int = DEFAULT_PRIME_SIEVE_LIMIT) -> Tuple[int, ...]:
    table = _tables.get(limit)
    if table is None:
        with _tables_lock:
            table = _tables.get(limit)
            if table is None:
                logger.debug("Building prime table up to %d", limit)
                table = tuple(calculate_primes(limit))
                _tables[limit] = table
                logger.debug("Prime table up to %d holds %d primes", limit, len(table))
    return table


@dataclass(frozen=True)
class Factorization:
    prime_factors: Dict[int, int] = field(default_factory=dict)
    remainder: int = 1

    def has_remainder(self) -> bool:
        return self.remainder != 1


def factorize(n: Union[int, Integer], limit: int = DEFAULT_PRIME_SIEVE_LIMIT) -> Factorization:
    """
    Attempt to factorize `n` using the primes up to `limit`.

    The remainder may be a non-prime if `n` has factors beyond the table.
    """
    num = n.value if isinstance(n, Integer) else n
    if num <= 1:
        raise ValueError(f"Number must be larger than 1, got {num}")

    primes = factorization_primes(limit)
    factors: Dict[int, int] = {}
    exhausted = True
    for prime in primes:
        if prime * prime > num:
            exhausted = False
            break
        count = 0
        while num % prime == 0:
            num //= prime
            count += 1
        if count:
            factors[prime] = count
    # no factor below sqrt(num) left, so num is 1 or a prime
    if not exhausted and num != 1 and primes and num <= primes[-1]:
        factors[num] = factors.get(num, 0) + 1
        num = 1
    return Factorization(factors, num)
