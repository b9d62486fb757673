from __future__ import annotations

import numpy as np
import pandas as pd

from .model import EXOGENOUS, MEDIATORS, TREATMENT

# |corr| threshold in units of 1/sqrt(N), the standard error of a sample
# correlation between independent variables.
_INDEPENDENCE_Z = 4.0

# A sample correlation needs at least three rows to be defined and non-trivial.
_MIN_INDEPENDENCE_ROWS = 3


class Check:
    """Result of a single consistency check."""

    def __init__(self, name: str, passed: bool, detail: str) -> None:
        self.name = name
        self.passed = passed
        self.detail = detail

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"Check({status!r}, {self.name!r})"


class CheckReport:
    """
    Base class for check reports.

    Subclasses implement ``_header_lines()`` to supply the title shown at the
    top of ``summary()``. ``checks``, ``passed``, ``failed_checks``,
    ``summary()`` and ``__repr__`` live here.
    """

    def __init__(
        self,
        checks: list[Check],
        treatment: str,
        outcome: str,
    ) -> None:
        self._checks = checks
        self._treatment = treatment
        self._outcome = outcome

    def _header_lines(self) -> list[str]:
        raise NotImplementedError

    @property
    def checks(self) -> list[Check]:
        """All checks, in the order they were run."""
        return list(self._checks)

    @property
    def passed(self) -> bool:
        """``True`` if every check passed."""
        return all(c.passed for c in self._checks)

    @property
    def failed_checks(self) -> list[Check]:
        """Only the checks that did not pass."""
        return [c for c in self._checks if not c.passed]

    def summary(self) -> str:
        """Each check result followed by the overall verdict."""
        lines = ["", *self._header_lines(), "─" * 50]
        for check in self._checks:
            status = "PASS" if check.passed else "FAIL"
            lines.append(f"  [{status}]  {check.name}: {check.detail}")
        lines.append("")
        if self.passed:
            lines.append("  All checks passed.")
        else:
            lines.append(f"  {len(self.failed_checks)} check(s) failed, see above.")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.summary()


class PathCheckReport(CheckReport):
    """
    Outcome of comparing a fitted path regression against the closed-form model.

    Obtain via ``PathRegressionResult.compare(model, data)``. Interval checks
    share a family-wise ``alpha``: each interval is built at ``alpha / k``
    for ``k`` interval checks (Bonferroni).

    Example::

        result = PathRegression(model.dag).fit(df)
        report = result.compare(model, df)
        print(report.summary())
    """

    def __init__(
        self,
        checks: list[Check],
        treatment: str,
        outcome: str,
        alpha: float,
        n_intervals: int,
    ) -> None:
        super().__init__(checks, treatment, outcome)
        self._alpha = alpha
        self._n_intervals = n_intervals

    @property
    def alpha(self) -> float:
        """Family-wise error rate shared by the interval checks."""
        return self._alpha

    @property
    def interval_level(self) -> float:
        """Confidence level of each individual interval."""
        return 1 - self._alpha / self._n_intervals

    def _header_lines(self) -> list[str]:
        return [
            f"Path Consistency Report: {self._treatment} → {self._outcome}",
            f"  Intervals: {_fmt_level(self.interval_level)} each, "
            f"{_fmt_level(1 - self._alpha)} family-wise "
            f"(Bonferroni over {self._n_intervals} checks)",
        ]


def _fmt_level(level: float) -> str:
    return f"{100 * level:g}%"


def check_within_ci(
    name: str,
    expected: float,
    estimate: float,
    conf_int: tuple[float, float],
    level: float = 0.95,
) -> Check:
    """Pass when the closed-form value lies inside the fitted interval."""
    lo, hi = conf_int
    passed = lo <= expected <= hi
    detail = (
        f"expected {expected:.4f}, estimated {estimate:.4f}  "
        f"({_fmt_level(level)} CI [{lo:.4f}, {hi:.4f}])"
    )
    if not passed:
        detail += "  Closed-form value falls outside the interval."
    return Check(name=name, passed=passed, detail=detail)


def check_exogenous_independence(data: pd.DataFrame) -> Check:
    """
    OA is drawn after and apart from everything upstream of the outcome, so
    its sample correlation with SM and each mediator should stay within
    sampling noise.

    Raises
    ------
    ValueError
        If a column is missing, or there are fewer than three rows to
        correlate.
    """
    others = [TREATMENT, *MEDIATORS]
    missing = [c for c in [EXOGENOUS, *others] if c not in data.columns]
    if missing:
        raise ValueError(f"Columns {missing} not found in dataframe.")
    if len(data) < _MIN_INDEPENDENCE_ROWS:
        raise ValueError(
            f"Independence of {EXOGENOUS} needs at least {_MIN_INDEPENDENCE_ROWS} rows, "
            f"got {len(data)}."
        )

    threshold = _INDEPENDENCE_Z / np.sqrt(len(data))
    corrs = {c: float(data[EXOGENOUS].corr(data[c])) for c in others}
    worst = max(corrs, key=lambda c: abs(corrs[c]))
    passed = abs(corrs[worst]) <= threshold

    detail = f"max |corr({EXOGENOUS}, ·)| = {abs(corrs[worst]):.4f} on {worst}  (threshold {threshold:.4f})"
    if not passed:
        detail += f"  {EXOGENOUS} is not independent of the treatment pathway."
    return Check(name=f"{EXOGENOUS} independence", passed=passed, detail=detail)
