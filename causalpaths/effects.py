"""
Closed-form causal effects for linear path models.

In a linear structural model the effect carried by one directed path is the
product of the coefficients on its edges, and the total effect of a treatment
on an outcome is the sum over every directed path between them. Nothing here
touches data or randomness.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ._exceptions import SpecificationError

if TYPE_CHECKING:
    from .model import MediationModel

N_MEDIATORS = 4


def _check_length(name: str, values: Sequence[float]) -> None:
    if len(values) != N_MEDIATORS:
        raise SpecificationError(
            f"'{name}' must hold exactly {N_MEDIATORS} coefficients "
            f"(one per mediator), got {len(values)}: {list(values)}"
        )


def total_effect(
    coefs_mediators: Sequence[float],
    coefs_MH: Sequence[float],
    coef_direct: float,
) -> float:
    """
    Total causal effect of the treatment on the outcome.

    ``coefs_mediators[i]`` and ``coefs_MH[i]`` describe the same mediator, so
    the result is ``sum(a * b for a, b in zip(...)) + coef_direct``.

    Raises
    ------
    SpecificationError
        If either vector does not hold exactly four coefficients.
    """
    _check_length("coefs_mediators", coefs_mediators)
    _check_length("coefs_MH", coefs_MH)
    indirect = sum(float(a) * float(b) for a, b in zip(coefs_mediators, coefs_MH))
    return indirect + float(coef_direct)


def path_effects(model: MediationModel) -> dict[tuple[str, ...], float]:
    """
    Effect carried by each directed treatment → outcome path.

    Keys are node tuples such as ``("SM", "OS", "MH")``; values are the
    product of the edge coefficients along that path.
    """
    weights = model.edge_weights
    effects: dict[tuple[str, ...], float] = {}
    for path in model.dag.paths(model.treatment, model.outcome):
        product = 1.0
        for cause, effect in zip(path, path[1:]):
            product *= weights[(cause, effect)]
        effects[path] = product
    return effects


def indirect_effect(model: MediationModel) -> float:
    """Portion of the total effect that flows through the mediators."""
    return sum(m.activation * m.effect for m in model.mediators)
