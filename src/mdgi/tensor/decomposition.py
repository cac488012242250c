# src/mdgi/tensor/decomposition.py
"""
Rank-1 nonnegative three-way (PARAFAC/CP) decomposition by alternating least squares.

X[i, j, h] ~ a[i] * b[j] * c[h]   with a, b, c >= 0 elementwise.

For rank 1 every ALS subproblem has a closed form: the optimal vector for one
mode is the tensor contracted against the other two factors, divided by the
product of their squared norms. Nonnegativity is enforced by projecting each
update onto the nonnegative orthant (clipping at zero).
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from pydantic import ValidationError
from tqdm import tqdm

from mdgi.config import ALSParams
from mdgi.errors import DecompositionFailure, InvalidInput, InvalidParameter
from mdgi.utils.seed import resolve_seed, restart_generators


@dataclass(frozen=True, eq=False)
class RankOneFactors:
    """
    Output of the decomposition. var_weights and time_weights have unit
    Euclidean norm; the overall scale of the fit is carried by unit_scores.
    """
    unit_scores: np.ndarray
    var_weights: np.ndarray
    time_weights: np.ndarray
    sse: float
    n_iter: int
    restart: int
    seed: int

    def reconstruct(self) -> np.ndarray:
        return np.einsum("i,j,h->ijh", self.unit_scores, self.var_weights, self.time_weights)


@dataclass
class _Fit:
    sse: float
    n_iter: int
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray


def validate_tensor(tensor) -> np.ndarray:
    """Coerce to a float (n, m, H) array; reject wrong rank, empty modes, non-finite entries."""
    try:
        X = np.asarray(tensor, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidInput(f"tensor is not numeric: {err}") from err
    if X.ndim != 3:
        raise InvalidInput(f"tensor must be three-dimensional (units x variables x occasions), got shape {X.shape}")
    if 0 in X.shape:
        raise InvalidInput(f"tensor has an empty mode: shape {X.shape}")
    if not np.all(np.isfinite(X)):
        raise InvalidInput("tensor contains NaN or infinite entries")
    return X


def _sse(X: np.ndarray, normX2: float, a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    inner = float(np.einsum("ijh,i,j,h->", X, a, b, c))
    fit2 = float(a @ a) * float(b @ b) * float(c @ c)
    return max(normX2 - 2.0 * inner + fit2, 0.0)


def _als_restart(X: np.ndarray, normX2: float, rng: np.random.Generator,
                 tol: float, max_iter: int) -> Optional[_Fit]:
    """One ALS run from a random nonnegative start. None if a factor collapses to zero."""
    n, m, H = X.shape
    a = np.zeros(n)
    b = rng.random(m)
    c = rng.random(H)

    prev = np.inf
    sse = normX2
    it = 0
    for it in range(1, max_iter + 1):
        denom = float(b @ b) * float(c @ c)
        if denom <= 0.0:
            return None
        a = np.clip(np.einsum("ijh,j,h->i", X, b, c) / denom, 0.0, None)

        denom = float(a @ a) * float(c @ c)
        if denom <= 0.0:
            return None
        b = np.clip(np.einsum("ijh,i,h->j", X, a, c) / denom, 0.0, None)

        denom = float(a @ a) * float(b @ b)
        if denom <= 0.0:
            return None
        c = np.clip(np.einsum("ijh,i,j->h", X, a, b) / denom, 0.0, None)

        sse = _sse(X, normX2, a, b, c)
        if sse == 0.0 or (np.isfinite(prev) and (prev - sse) <= tol * prev):
            break
        prev = sse

    if not (np.any(a > 0) and np.any(b > 0) and np.any(c > 0)):
        return None
    return _Fit(sse=sse, n_iter=it, a=a, b=b, c=c)


def select_restart(fits: Sequence[Optional[_Fit]]) -> tuple[Optional[_Fit], int]:
    """Lowest-SSE fit and its restart index; equal SSE keeps the earliest restart."""
    best: Optional[_Fit] = None
    best_k = -1
    for k, fit in enumerate(fits):
        if fit is None:
            continue
        if best is None or fit.sse < best.sse:
            best, best_k = fit, k
    return best, best_k


def decompose_rank1(tensor, **als) -> RankOneFactors:
    """
    Fit a rank-1 nonnegative CP model to an (n, m, H) tensor.

    Keyword arguments are the ALSParams knobs: nstart, tol, max_iter, seed,
    n_jobs, progress. Restarts are enumerated in a fixed order, each with its
    own generator spawned from `seed`; the lowest-SSE fit wins and ties go to
    the earliest restart, so the result does not depend on n_jobs.
    """
    try:
        params = ALSParams(**als)
    except ValidationError as err:
        raise InvalidParameter(str(err)) from err

    X = validate_tensor(tensor)
    normX2 = float(np.sum(X * X))
    seed = resolve_seed(params.seed)
    rngs = restart_generators(seed, params.nstart)

    def run(rng: np.random.Generator) -> Optional[_Fit]:
        return _als_restart(X, normX2, rng, params.tol, params.max_iter)

    if params.n_jobs > 1:
        with ThreadPoolExecutor(max_workers=params.n_jobs) as pool:
            fits = pool.map(run, rngs)
            fits = list(tqdm(fits, total=params.nstart, ncols=100, desc="[MDGI] ALS restarts",
                             leave=False, disable=not params.progress))
    else:
        fits = [run(rng) for rng in tqdm(rngs, total=params.nstart, ncols=100, desc="[MDGI] ALS restarts",
                                         leave=False, disable=not params.progress)]

    best, best_k = select_restart(fits)

    # the all-zero solution has SSE == ||X||^2
    if best is None or not best.sse < normX2:
        raise DecompositionFailure(
            f"no nonnegative rank-1 fit improved on the zero solution in {params.nstart} restarts"
        )

    nb = float(np.linalg.norm(best.b))
    nc = float(np.linalg.norm(best.c))
    return RankOneFactors(
        unit_scores=best.a * nb * nc,
        var_weights=best.b / nb,
        time_weights=best.c / nc,
        sse=best.sse,
        n_iter=best.n_iter,
        restart=best_k,
        seed=seed,
    )
