import pytest
from structlog.testing import capture_logs

from causalpaths import DAG, MediationModel, PathRegression, mediation_dag, simulate
from causalpaths.scenarios import NEGATIVE_EFFECT, POSITIVE_EFFECT


N = 20_000


def fit(model, n=N, seed=42):
    df = simulate(model, n, seed=seed)
    return PathRegression(model.dag).fit(df), df


class TestPathRegression:
    @pytest.mark.parametrize("model", [NEGATIVE_EFFECT, POSITIVE_EFFECT])
    def test_total_effect_recovered(self, model):
        result, _ = fit(model)
        assert abs(result.total_effect - model.total_effect) < 0.2

    @pytest.mark.parametrize("model", [NEGATIVE_EFFECT, POSITIVE_EFFECT])
    def test_direct_effect_recovered(self, model):
        result, _ = fit(model)
        assert abs(result.direct_effect - model.direct) < 0.2

    def test_signs_match_closed_form(self):
        negative, _ = fit(NEGATIVE_EFFECT)
        positive, _ = fit(POSITIVE_EFFECT)
        assert negative.total_effect < 0
        assert positive.total_effect > 0

    def test_mediator_effects_recovered(self):
        result, _ = fit(POSITIVE_EFFECT)
        fitted = result.mediator_effects
        for m in POSITIVE_EFFECT.mediators:
            assert abs(fitted[m.name] - m.effect) < 0.05

    def test_estimate_tightens_with_more_data(self):
        small, _ = fit(NEGATIVE_EFFECT, n=500, seed=1)
        large, _ = fit(NEGATIVE_EFFECT, n=50_000, seed=1)
        assert large.total_std_err < small.total_std_err
        assert abs(large.total_effect - NEGATIVE_EFFECT.total_effect) < 0.15

    def test_large_direct_effect_with_opposing_mediators(self):
        model = MediationModel.from_vectors([3, -2, 1, 0], [-1, 2, -.5, 4], 2.5, coef_OA=-1)
        result, _ = fit(model, seed=7)
        assert abs(result.direct_effect - 2.5) < 0.2
        assert abs(result.total_effect - model.total_effect) < 0.5

    def test_indirect_is_total_minus_direct(self):
        result, _ = fit(NEGATIVE_EFFECT)
        assert result.indirect_effect == pytest.approx(result.total_effect - result.direct_effect)

    def test_mediators_taken_from_dag(self):
        result, _ = fit(NEGATIVE_EFFECT)
        assert result.mediators == {"OS", "OP", "FM", "FR"}
        assert "OA" not in result.statsmodels_direct_result.params.index

    def test_result_has_expected_attributes(self):
        result, _ = fit(POSITIVE_EFFECT)
        for effect, (lo, hi) in [
            (result.total_effect, result.total_conf_int),
            (result.direct_effect, result.direct_conf_int),
        ]:
            assert lo < effect < hi
        assert result.total_std_err > 0
        assert result.direct_std_err > 0
        assert 0 <= result.total_pvalue <= 1
        assert 0 <= result.direct_pvalue <= 1
        assert result.statsmodels_total_result is not None

    def test_summary_runs(self):
        result, _ = fit(POSITIVE_EFFECT, n=1_000)
        summary = result.summary()
        assert "Path Regression: SM → MH" in summary
        assert "FM, FR, OP, OS" in summary

    def test_no_mediators_gives_equal_estimates(self):
        dag = DAG()
        dag.assume("SM").causes("MH")
        df = simulate(NEGATIVE_EFFECT, 1_000, seed=3)
        result = PathRegression(dag).fit(df)
        assert result.mediators == set()
        assert result.total_effect == result.direct_effect

    def test_logs_fit_event(self):
        df = simulate(NEGATIVE_EFFECT, 200, seed=0)
        with capture_logs() as logs:
            PathRegression(mediation_dag()).fit(df)
        events = [e for e in logs if e["event"] == "path_regression_fit"]
        assert events and events[0]["n"] == 200


class TestPathRegressionValidation:
    def test_unknown_treatment_raises(self):
        with pytest.raises(ValueError, match="Treatment"):
            PathRegression(mediation_dag(), treatment="X")

    def test_same_treatment_and_outcome_raises(self):
        with pytest.raises(ValueError, match="different"):
            PathRegression(mediation_dag(), treatment="MH", outcome="MH")

    def test_missing_outcome_column_raises(self):
        df = simulate(NEGATIVE_EFFECT, 100, seed=0).drop(columns=["MH"])
        with pytest.raises(ValueError, match="Outcome column"):
            PathRegression(mediation_dag()).fit(df)

    def test_missing_mediator_column_raises(self):
        df = simulate(NEGATIVE_EFFECT, 100, seed=0).drop(columns=["FM"])
        with pytest.raises(ValueError, match="Mediator columns"):
            PathRegression(mediation_dag()).fit(df)


class TestCompare:
    def test_report_structure(self):
        result, df = fit(NEGATIVE_EFFECT)
        report = result.compare(NEGATIVE_EFFECT, df)
        assert [c.name for c in report.checks] == [
            "Total effect recovered",
            "Direct effect recovered",
            "OA independence",
        ]

    def test_without_data_skips_independence(self):
        result, _ = fit(NEGATIVE_EFFECT, n=1_000)
        assert len(result.compare(NEGATIVE_EFFECT).checks) == 2

    def test_wrong_model_fails(self):
        result, _ = fit(NEGATIVE_EFFECT)
        wrong = MediationModel.from_vectors([1, .5, 2, -.25], [.2, .4, .3, -1], 3.0)
        report = result.compare(wrong)
        assert not report.passed
        assert len(report.failed_checks) == 2
        assert "FAIL" in report.summary()

    def test_checks_returns_copy(self):
        result, _ = fit(NEGATIVE_EFFECT, n=1_000)
        report = result.compare(NEGATIVE_EFFECT)
        report.checks.clear()
        assert len(report.checks) == 2

    @pytest.mark.parametrize("seed", range(13))
    def test_true_model_passes(self, seed):
        result, df = fit(NEGATIVE_EFFECT, seed=seed)
        report = result.compare(NEGATIVE_EFFECT, df)
        assert report.passed, report.summary()

    def test_intervals_are_bonferroni_corrected(self):
        result, _ = fit(NEGATIVE_EFFECT)
        report = result.compare(NEGATIVE_EFFECT)
        assert report.alpha == pytest.approx(0.001)
        assert report.interval_level == pytest.approx(0.9995)
        assert "99.95% CI" in report.checks[0].detail
        assert "99.9% family-wise" in report.summary()

    def test_wider_family_alpha_narrows_intervals(self):
        result, _ = fit(NEGATIVE_EFFECT)
        wide = result.compare(NEGATIVE_EFFECT, alpha=0.001)
        narrow = result.compare(NEGATIVE_EFFECT, alpha=0.1)
        assert narrow.interval_level < wide.interval_level
        assert "95% CI" in narrow.checks[0].detail
