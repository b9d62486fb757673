"""
Synthetic data from the mediation DAG.

Every call owns its random generator: pass ``seed`` for a reproducible draw,
``rng`` to share a generator you manage yourself, or neither for fresh OS
entropy. Global numpy random state is never read or written.

Draw order is fixed (SM, OS, OP, FM, FR, outcome noise, OA), so a given seed
always yields bit-identical output.
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import pandas as pd
import structlog

from ._exceptions import SpecificationError
from .model import COLUMNS, EXOGENOUS, OUTCOME, TREATMENT, MediationModel

logger = structlog.get_logger(__name__)


def _check_n(n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise SpecificationError(f"Row count must be an integer, got {n!r}")
    if n <= 0:
        raise SpecificationError(f"Row count must be positive, got {n}")
    return int(n)


def _make_rng(
    seed: Optional[int],
    rng: Optional[np.random.Generator],
) -> np.random.Generator:
    if rng is not None:
        if seed is not None:
            raise SpecificationError("Pass either 'seed' or 'rng', not both.")
        return rng
    return np.random.default_rng(seed)


def simulate(
    model: MediationModel,
    n: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """
    Draw ``n`` i.i.d. rows from ``model``.

    Structural equations::

        SM       ~ Uniform[0, 1)
        M_i      = SM * activation_i + N(0, 1)        for M_i in OS, OP, FM, FR
        OA       ~ Uniform[0, 1)
        MH       = intercept + Σ M_i * effect_i + N(0, 1) + OA * oa_effect + SM * direct

    Parameters
    ----------
    model : MediationModel
        Coefficients to simulate from.
    n : int
        Number of rows; must be a positive integer.
    seed : int, optional
        Seeds a fresh generator before the first draw.
    rng : numpy.random.Generator, optional
        Generator to draw from instead. Mutually exclusive with ``seed``.

    Returns
    -------
    pd.DataFrame
        ``n`` rows, float columns in the order SM, OS, OP, FM, FR, OA, MH.

    Raises
    ------
    SpecificationError
        If ``n`` is not a positive integer, or both ``seed`` and ``rng`` are given.
    """
    n = _check_n(n)
    gen = _make_rng(seed, rng)

    sm = gen.uniform(size=n)
    columns: dict[str, np.ndarray] = {TREATMENT: sm}
    for m in model.mediators:
        columns[m.name] = sm * m.activation + gen.normal(size=n)

    noise = gen.normal(size=n)
    outcome = model.intercept
    for m in model.mediators:
        outcome = outcome + columns[m.name] * m.effect
    outcome = outcome + noise

    oa = gen.uniform(size=n)
    columns[EXOGENOUS] = oa
    columns[OUTCOME] = outcome + oa * model.oa_effect + sm * model.direct

    logger.debug(
        "dataset_simulated",
        n=n,
        seed=seed,
        total_effect=model.total_effect,
    )
    return pd.DataFrame({name: columns[name] for name in COLUMNS})


def generate_data(
    n: int,
    coefs_mediators: Sequence[float],
    coefs_MH: Sequence[float],
    coef_direct: float,
    coef_OA: float = 0.0,
    intercept: float = 0.0,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """
    Positional-vector shortcut for ``simulate``.

    ``coefs_mediators`` and ``coefs_MH`` are paired with OS, OP, FM, FR by
    position. Vector lengths are checked before any draw.
    """
    model = MediationModel.from_vectors(
        coefs_mediators, coefs_MH, coef_direct, coef_OA=coef_OA, intercept=intercept,
    )
    return simulate(model, n, seed=seed, rng=rng)
