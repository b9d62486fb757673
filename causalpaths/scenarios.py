"""
Worked coefficient sets for the mediation DAG.

The two scenarios share an intercept and OA effect and differ only in the
path coefficients, so the total effect of SM on MH flips sign between them.
"""
from .model import MediationModel

# Every mediator pathway and the direct path push MH down.
NEGATIVE_EFFECT = MediationModel.from_vectors(
    coefs_mediators=[-1, -.5, -2, .25],
    coefs_MH=[.2, .4, .3, -1],
    coef_direct=-.4,
    coef_OA=.5,
    intercept=1.0,
)

# Same direct harm, outweighed by positive mediator pathways.
POSITIVE_EFFECT = MediationModel.from_vectors(
    coefs_mediators=[.3, .4, 1, 2],
    coefs_MH=[.4, 1, .75, .3],
    coef_direct=-.4,
    coef_OA=.5,
    intercept=1.0,
)

SCENARIOS: dict[str, MediationModel] = {
    "negative": NEGATIVE_EFFECT,
    "positive": POSITIVE_EFFECT,
}
