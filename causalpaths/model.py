from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ._exceptions import SpecificationError
from .dag import DAG
from .effects import _check_length, indirect_effect, path_effects

TREATMENT = "SM"
OUTCOME = "MH"
EXOGENOUS = "OA"
MEDIATORS: tuple[str, ...] = ("OS", "OP", "FM", "FR")
COLUMNS: tuple[str, ...] = (TREATMENT, *MEDIATORS, EXOGENOUS, OUTCOME)

# Drawing coordinates for an external graph renderer: treatment on the left,
# mediators stacked in the middle, outcome on the right.
NODE_POSITIONS: dict[str, tuple[float, float]] = {
    "SM": (0.0, 0.0),
    "OS": (1.0, 1.5),
    "OP": (1.0, 0.5),
    "FM": (1.0, -0.5),
    "FR": (1.0, -1.5),
    "OA": (2.0, 1.5),
    "MH": (2.0, 0.0),
}


def mediation_dag() -> DAG:
    """
    The fixed graph every ``MediationModel`` simulates from::

        SM → OS, OP, FM, FR, MH
        OS, OP, FM, FR → MH
        OA → MH
    """
    dag = DAG()
    dag.assume(TREATMENT).causes(*MEDIATORS, OUTCOME)
    for name in MEDIATORS:
        dag.assume(name).causes(OUTCOME)
    dag.assume(EXOGENOUS).causes(OUTCOME)
    return dag


@dataclass(frozen=True)
class Mediator:
    """One mediator on the treatment → outcome pathway."""

    name: str
    """Column name of the mediator."""

    activation: float
    """Coefficient on the treatment → mediator edge."""

    effect: float
    """Coefficient on the mediator → outcome edge."""

    @property
    def indirect_effect(self) -> float:
        """Effect of the treatment carried through this mediator alone."""
        return self.activation * self.effect


@dataclass(frozen=True)
class MediationModel:
    """
    Linear structural model over the fixed mediation DAG.

    Holds one ``Mediator`` record per mediator (always OS, OP, FM, FR in that
    order) together with the direct treatment → outcome coefficient, the
    coefficient on the exogenous cause ``OA`` and the outcome intercept. Any
    real values are accepted.

    Most callers start from the positional vectors::

        model = MediationModel.from_vectors(
            coefs_mediators=[-1, -.5, -2, .25],
            coefs_MH=[.2, .4, .3, -1],
            coef_direct=-.4,
        )
        model.total_effect          # -1.65
        df = model.simulate(1_000, seed=0)
    """

    mediators: tuple[Mediator, ...]
    direct: float
    oa_effect: float = 0.0
    intercept: float = 0.0

    def __post_init__(self) -> None:
        # Frozen and hashable: any sequence of mediators is stored as a tuple.
        object.__setattr__(self, "mediators", tuple(self.mediators))
        names = tuple(m.name for m in self.mediators)
        if names != MEDIATORS:
            raise SpecificationError(
                f"Mediators must be {list(MEDIATORS)} in that order, got {list(names)}"
            )

    @classmethod
    def from_vectors(
        cls,
        coefs_mediators: Sequence[float],
        coefs_MH: Sequence[float],
        coef_direct: float,
        coef_OA: float = 0.0,
        intercept: float = 0.0,
    ) -> MediationModel:
        """
        Pair positional coefficient vectors with the mediators OS, OP, FM, FR.

        Parameters
        ----------
        coefs_mediators : sequence of 4 floats
            Treatment → mediator coefficients.
        coefs_MH : sequence of 4 floats
            Mediator → outcome coefficients.
        coef_direct : float
            Treatment → outcome coefficient.
        coef_OA : float
            OA → outcome coefficient.
        intercept : float
            Outcome intercept.

        Raises
        ------
        SpecificationError
            If either vector does not hold exactly four coefficients.
        """
        _check_length("coefs_mediators", coefs_mediators)
        _check_length("coefs_MH", coefs_MH)
        mediators = tuple(
            Mediator(name, float(a), float(b))
            for name, a, b in zip(MEDIATORS, coefs_mediators, coefs_MH)
        )
        return cls(
            mediators=mediators,
            direct=float(coef_direct),
            oa_effect=float(coef_OA),
            intercept=float(intercept),
        )

    # ── Graph view ────────────────────────────────────────────────────────────

    @property
    def treatment(self) -> str:
        return TREATMENT

    @property
    def outcome(self) -> str:
        return OUTCOME

    @property
    def dag(self) -> DAG:
        """The causal graph this model's coefficients live on."""
        return mediation_dag()

    @property
    def edge_weights(self) -> dict[tuple[str, str], float]:
        """Coefficient on every edge of ``dag``, keyed by (cause, effect)."""
        weights: dict[tuple[str, str], float] = {}
        for m in self.mediators:
            weights[(TREATMENT, m.name)] = m.activation
            weights[(m.name, OUTCOME)] = m.effect
        weights[(TREATMENT, OUTCOME)] = self.direct
        weights[(EXOGENOUS, OUTCOME)] = self.oa_effect
        return weights

    # ── Closed-form effects ───────────────────────────────────────────────────

    @property
    def coefs_mediators(self) -> list[float]:
        return [m.activation for m in self.mediators]

    @property
    def coefs_MH(self) -> list[float]:
        return [m.effect for m in self.mediators]

    @property
    def indirect_effect(self) -> float:
        """Sum of activation × effect over the four mediators."""
        return indirect_effect(self)

    @property
    def total_effect(self) -> float:
        """Indirect effect through every mediator plus the direct effect."""
        return self.indirect_effect + self.direct

    @property
    def path_effects(self) -> dict[tuple[str, ...], float]:
        """Product of edge coefficients along each treatment → outcome path."""
        return path_effects(self)

    # ── Simulation ────────────────────────────────────────────────────────────

    def simulate(
        self,
        n: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> pd.DataFrame:
        """Draw ``n`` i.i.d. rows from this model. See ``causalpaths.simulate.simulate``."""
        from .simulate import simulate
        return simulate(self, n, seed=seed, rng=rng)
