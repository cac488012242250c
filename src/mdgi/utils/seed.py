# src/mdgi/utils/seed.py
from __future__ import annotations
import os, random
import numpy as np

from mdgi.errors import InvalidParameter

def resolve_seed(seed: int | None) -> int:
    """
    Resolve the seed used for ALS restarts. If None, derive from env or random.
    Returns the resolved seed so it can be stored with the result.
    """
    if seed is None:
        env_seed = os.getenv("MDGI_SEED")
        if env_seed is None:
            return random.randint(1, 2_147_483_647)
        try:
            seed = int(env_seed)
        except ValueError as err:
            raise InvalidParameter(f"MDGI_SEED must be an integer, got {env_seed!r}") from err
    seed = int(seed)
    if seed < 0:
        raise InvalidParameter(f"seed must be >= 0, got {seed}")
    return seed

def restart_generators(seed: int, nstart: int) -> list[np.random.Generator]:
    """One independent Generator per restart, fixed by (seed, restart index)."""
    children = np.random.SeedSequence(seed).spawn(nstart)
    return [np.random.default_rng(s) for s in children]
