"""
Total effect of SM on MH, two ways.

DAG:
    SM → OS, OP, FM, FR → MH
    SM ─────────────────→ MH
    OA ─────────────────→ MH

The closed-form total effect sums activation × effect over the four
mediators and adds the direct path. Regressing MH on SM alone should land
close to it.

True total effect: -1.65  (-.2 - .2 - .6 - .25 - .4)
"""

from causalpaths import PathRegression
from causalpaths.logging_config import configure_logging
from causalpaths.scenarios import NEGATIVE_EFFECT

configure_logging(log_level="DEBUG")

model = NEGATIVE_EFFECT
print(model.dag)
print()

for path, effect in model.path_effects.items():
    print(f"  {' → '.join(path):<14} {effect:>+8.4f}")
print(f"  {'total':<14} {model.total_effect:>+8.4f}")

df = model.simulate(5_000, seed=0)
result = PathRegression(model.dag).fit(df)
print(result.summary())
