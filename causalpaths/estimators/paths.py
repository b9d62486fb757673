from __future__ import annotations

from typing import Optional

import pandas as pd
import statsmodels.formula.api as smf
import structlog

from ..dag import DAG
from ..model import MediationModel

logger = structlog.get_logger(__name__)

# Family-wise error rate shared by the interval checks in ``compare()``.
COMPARE_ALPHA = 0.001


def _coef(result, name: str) -> float:
    return float(result.params[name])


def _ci(result, name: str, alpha: float = 0.05) -> tuple[float, float]:
    ci = result.conf_int(alpha=alpha)
    return (float(ci.loc[name, 0]), float(ci.loc[name, 1]))


class PathRegressionResult:
    """
    The result of fitting both path regressions.

    Holds the total-effect model (outcome on treatment alone) and the
    direct-effect model (outcome on treatment plus every mediator), so the
    indirect effect can be read off as their difference.
    """

    def __init__(
        self,
        total_result,
        direct_result,
        treatment: str,
        outcome: str,
        mediators: set[str],
    ) -> None:
        self._total = total_result
        self._direct = direct_result
        self._treatment = treatment
        self._outcome = outcome
        self._mediators = mediators

    @property
    def total_effect(self) -> float:
        """Coefficient on treatment with no mediators controlled for."""
        return _coef(self._total, self._treatment)

    @property
    def direct_effect(self) -> float:
        """Coefficient on treatment holding every mediator fixed."""
        return _coef(self._direct, self._treatment)

    @property
    def indirect_effect(self) -> float:
        """Total minus direct: the part transmitted through the mediators."""
        return self.total_effect - self.direct_effect

    @property
    def total_std_err(self) -> float:
        return float(self._total.bse[self._treatment])

    @property
    def direct_std_err(self) -> float:
        return float(self._direct.bse[self._treatment])

    @property
    def total_conf_int(self) -> tuple[float, float]:
        """95% confidence interval for the total effect."""
        return _ci(self._total, self._treatment)

    @property
    def direct_conf_int(self) -> tuple[float, float]:
        """95% confidence interval for the direct effect."""
        return _ci(self._direct, self._treatment)

    @property
    def total_pvalue(self) -> float:
        return float(self._total.pvalues[self._treatment])

    @property
    def direct_pvalue(self) -> float:
        return float(self._direct.pvalues[self._treatment])

    @property
    def mediator_effects(self) -> dict[str, float]:
        """Fitted mediator → outcome coefficients from the direct-effect model."""
        return {m: _coef(self._direct, m) for m in sorted(self._mediators)}

    @property
    def mediators(self) -> set[str]:
        """Variables controlled for in the direct-effect model."""
        return self._mediators

    @property
    def statsmodels_total_result(self):
        """The underlying total-effect statsmodels result, for full diagnostics."""
        return self._total

    @property
    def statsmodels_direct_result(self):
        """The underlying direct-effect statsmodels result, for full diagnostics."""
        return self._direct

    def compare(
        self,
        model: MediationModel,
        data: Optional[pd.DataFrame] = None,
        alpha: float = COMPARE_ALPHA,
    ):
        """
        Check the fitted coefficients against ``model``'s closed-form values.

        Runs:

        - **Total effect recovered**: ``model.total_effect`` inside the
          total-effect interval.
        - **Direct effect recovered**: ``model.direct`` inside the
          direct-effect interval.
        - **OA independence** (only when ``data`` is given): OA uncorrelated
          with the treatment and every mediator, within sampling noise.

        The two intervals share the family-wise error rate ``alpha``: each is
        built at ``alpha / 2``, so data simulated from ``model`` fails either
        interval check with probability at most ``alpha``.

        Parameters
        ----------
        model : MediationModel
            The coefficients the data was simulated from.
        data : pd.DataFrame, optional
            The same dataframe passed to ``fit()``.
        alpha : float
            Family-wise error rate for the interval checks.
        """
        from ..checks import PathCheckReport, check_exogenous_independence, check_within_ci

        n_intervals = 2
        per_check = alpha / n_intervals
        level = 1 - per_check
        checks = [
            check_within_ci(
                "Total effect recovered",
                model.total_effect, self.total_effect,
                _ci(self._total, self._treatment, per_check), level,
            ),
            check_within_ci(
                "Direct effect recovered",
                model.direct, self.direct_effect,
                _ci(self._direct, self._treatment, per_check), level,
            ),
        ]
        if data is not None:
            checks.append(check_exogenous_independence(data))
        return PathCheckReport(
            checks=checks,
            treatment=self._treatment,
            outcome=self._outcome,
            alpha=alpha,
            n_intervals=n_intervals,
        )

    def summary(self) -> str:
        t_lo, t_hi = self.total_conf_int
        d_lo, d_hi = self.direct_conf_int
        lines = [
            "",
            f"Path Regression: {self._treatment} → {self._outcome}",
            "─" * 50,
            f"  Total effect         : {self.total_effect:>10.4f}  (no controls)",
            f"  95% CI               : [{t_lo:.4f}, {t_hi:.4f}]",
            f"  Direct effect        : {self.direct_effect:>10.4f}  "
            f"(controlling for: {', '.join(sorted(self._mediators))})",
            f"  95% CI               : [{d_lo:.4f}, {d_hi:.4f}]",
            f"  Indirect effect      : {self.indirect_effect:>10.4f}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.summary()


class PathRegression:
    """
    OLS decomposition of a treatment's effect into direct and indirect parts.

    Given a DAG, this estimator:
      1. Finds the mediators: nodes on a directed path from treatment to outcome.
      2. Regresses outcome on treatment alone for the total effect.
      3. Regresses outcome on treatment plus the mediators for the direct effect.

    Usage
    -----
        model = MediationModel.from_vectors([.3, .4, 1, 2], [.4, 1, .75, .3], -.4)
        df = model.simulate(5_000, seed=1)
        result = PathRegression(model.dag).fit(df)
        print(result.summary())
    """

    def __init__(self, dag: DAG, treatment: str = "SM", outcome: str = "MH") -> None:
        self._dag = dag
        self._treatment = treatment
        self._outcome = outcome
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        nodes = self._dag.nodes
        for label, var in [("Treatment", self._treatment), ("Outcome", self._outcome)]:
            if var not in nodes:
                raise ValueError(
                    f"{label} '{var}' is not a node in the DAG. "
                    f"Known nodes: {sorted(nodes)}"
                )
        if self._treatment == self._outcome:
            raise ValueError("Treatment and outcome must be different variables.")

    def fit(self, data: pd.DataFrame) -> PathRegressionResult:
        """
        Fit the total-effect and direct-effect regressions.

        Parameters
        ----------
        data : pd.DataFrame
            Must contain the treatment, the outcome, and every mediator in
            the DAG. Column names must match node names.

        Raises
        ------
        ValueError
            If treatment, outcome, or a mediator column is missing.
        """
        data_columns = set(data.columns)

        for label, var in [("Treatment", self._treatment), ("Outcome", self._outcome)]:
            if var not in data_columns:
                raise ValueError(f"{label} column '{var}' not found in dataframe.")

        mediators = self._dag.mediators(self._treatment, self._outcome)
        missing = sorted(mediators - data_columns)
        if missing:
            raise ValueError(
                f"Mediator columns {missing} not found in dataframe. "
                f"The direct effect cannot be separated without them."
            )

        rhs = " + ".join([self._treatment] + sorted(mediators))
        total_result = smf.ols(f"{self._outcome} ~ {self._treatment}", data=data).fit()
        direct_result = smf.ols(f"{self._outcome} ~ {rhs}", data=data).fit()

        logger.debug(
            "path_regression_fit",
            treatment=self._treatment,
            outcome=self._outcome,
            mediators=sorted(mediators),
            n=len(data),
        )
        return PathRegressionResult(
            total_result,
            direct_result,
            self._treatment,
            self._outcome,
            mediators,
        )
