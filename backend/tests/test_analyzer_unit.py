import pytest

from backend.atlas.analyzer import MetricAnalyzer
from backend.atlas.errors import FetchError, InsufficientDataError
from backend.atlas.metrics import MetricKind
from backend.atlas.recommendations import RecommendationTable, bucket_names


def _fake_fetcher(series: dict[str, list[float]], calls: list[str] | None = None):
    def fetch(series_id: str) -> list[float]:
        if calls is not None:
            calls.append(series_id)
        return list(series.get(series_id, []))

    return fetch


def test_analyze_unemployment_builds_full_result() -> None:
    calls: list[str] = []
    analyzer = MetricAnalyzer(_fake_fetcher({"UNRATE": [3.5, 3.9, 7.0]}, calls))

    result = analyzer.analyze(MetricKind.UNEMPLOYMENT)

    assert calls == ["UNRATE"]
    assert result.metric == MetricKind.UNEMPLOYMENT
    assert result.label == "Unemployment Rate"
    assert result.value == 7.0
    assert result.risk == 50.0
    assert result.recommendation.startswith("Critically high unemployment risk")


def test_analyze_inflation_uses_year_over_year_change() -> None:
    cpi = [300.0] + [305.0] * 11 + [309.0]
    result = MetricAnalyzer(_fake_fetcher({"CPIAUCSL": cpi})).analyze("inflation")
    assert result.label == "Inflation Rate"
    assert result.value == 3.0
    assert result.risk == pytest.approx(33.33)
    assert result.recommendation.startswith("Inflation is rising but remains manageable")


def test_analyze_interest_rate_at_neutral_has_zero_risk() -> None:
    result = MetricAnalyzer(_fake_fetcher({"FEDFUNDS": [5.33, 2.75]})).analyze(MetricKind.INTEREST_RATE)
    assert result.value == 2.75
    assert result.risk == 0.0
    assert result.recommendation.startswith("Interest rates are at historically low levels")


def test_analyze_gdp_growth_far_from_target_is_extreme() -> None:
    gdp = [20000.0, 20100.0, 20200.0, 20300.0, 19000.0]
    result = MetricAnalyzer(_fake_fetcher({"GDPC1": gdp})).analyze(MetricKind.GDP_GROWTH)
    assert result.value == -5.0
    assert result.risk == 100.0
    assert result.recommendation.startswith("Critically low GDP growth")


def test_analyze_empty_series_raises_fetch_error() -> None:
    analyzer = MetricAnalyzer(_fake_fetcher({}))
    with pytest.raises(FetchError):
        analyzer.analyze(MetricKind.UNEMPLOYMENT)


def test_analyze_short_history_raises_insufficient_data() -> None:
    analyzer = MetricAnalyzer(_fake_fetcher({"GDPC1": [1.0, 2.0, 3.0]}))
    with pytest.raises(InsufficientDataError):
        analyzer.analyze(MetricKind.GDP_GROWTH)


def test_analyze_propagates_fetch_errors() -> None:
    def failing_fetch(series_id: str) -> list[float]:
        raise FetchError(f"upstream unavailable for {series_id}")

    with pytest.raises(FetchError, match="FEDFUNDS"):
        MetricAnalyzer(failing_fetch).analyze(MetricKind.INTEREST_RATE)


def test_analyze_uses_injected_recommendation_table() -> None:
    table = RecommendationTable(
        texts={kind: tuple(f"{kind.value}/{name}" for name in bucket_names()) for kind in MetricKind}
    )
    analyzer = MetricAnalyzer(_fake_fetcher({"UNRATE": [5.0]}), recommendations=table)
    assert analyzer.analyze(MetricKind.UNEMPLOYMENT).recommendation == "unemployment/moderate"
