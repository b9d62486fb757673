"""
Separating direct from mediated effects.

Here the direct path harms MH (-0.4) but the mediated paths help more, so the
total effect is positive (1.47). Controlling for every mediator recovers the
direct coefficient; leaving them out recovers the total.
"""

from causalpaths import PathRegression
from causalpaths.scenarios import POSITIVE_EFFECT

model = POSITIVE_EFFECT
df = model.simulate(10_000, seed=1)

result = PathRegression(model.dag).fit(df)
print(result.summary())
print(result.compare(model, df).summary())
