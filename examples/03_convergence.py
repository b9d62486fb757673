"""
Regression estimates tighten around the closed-form total effect as N grows.
"""

from causalpaths import MediationModel, PathRegression

model = MediationModel.from_vectors(
    coefs_mediators=[3, -2, 1, 0],
    coefs_MH=[-1, 2, -.5, 4],
    coef_direct=2.5,
    coef_OA=-1,
)
print(f"Closed-form total effect: {model.total_effect:.4f}\n")

for n in (100, 1_000, 10_000, 100_000):
    result = PathRegression(model.dag).fit(model.simulate(n, seed=n))
    lo, hi = result.total_conf_int
    print(f"  N = {n:>7,}   estimate {result.total_effect:>8.4f}   95% CI [{lo:.4f}, {hi:.4f}]")
