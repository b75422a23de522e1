from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# computation time limit: bit length of the base plus the exponent numerator
DEFAULT_ROOT_BIT_BUDGET = 512
DEFAULT_PRIME_SIEVE_LIMIT = 1 << 24
# largest integer power the distributive engine multiplies out; a sum of n
# terms raised to k expands into n^k products
DEFAULT_MAX_EXPANSION_EXPONENT = 16
DEFAULT_MAX_NORMALIZATION_PASSES = 64

ENV_PREFIX = "ALGEBRA_"


@dataclass(frozen=True)
class EngineConfig:
    root_bit_budget: int = DEFAULT_ROOT_BIT_BUDGET
    prime_sieve_limit: int = DEFAULT_PRIME_SIEVE_LIMIT
    max_expansion_exponent: int = DEFAULT_MAX_EXPANSION_EXPONENT
    max_normalization_passes: int = DEFAULT_MAX_NORMALIZATION_PASSES

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Read overrides such as ALGEBRA_ROOT_BIT_BUDGET=1024 from the environment."""
        env = os.environ if env is None else env
        values = {}
        for name in EngineConfig.__dataclass_fields__:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                value = int(raw, 0)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX + name.upper()} must be an integer, got {raw!r}")
            if value <= 0:
                raise ValueError(f"{ENV_PREFIX + name.upper()} must be positive, got {value}")
            values[name] = value
        return EngineConfig(**values)


DEFAULT_CONFIG = EngineConfig()
