import pytest

from terrasignal.analytics.trend import linear_slope


def test_slope_of_rising_totals():
    years = [2019, 2020, 2021, 2022, 2023]
    assert linear_slope(years, [100, 200, 300, 400, 500]) == pytest.approx(100.0)


def test_slope_matches_closed_form():
    xs = [1, 2, 4, 7]
    ys = [3.0, 1.0, 6.0, 9.0]
    mx = sum(xs) / len(xs)
    my = sum(ys) / len(ys)
    expected = sum((x - mx) * (y - my) for x, y in zip(xs, ys)) / sum(
        (x - mx) ** 2 for x in xs
    )
    assert linear_slope(xs, ys) == pytest.approx(expected)


@pytest.mark.parametrize(
    "xs,ys", [([], []), ([2020], [5.0]), ([2020, 2020], [1.0, 2.0]), ([1, 2], [1.0])]
)
def test_degenerate_inputs_return_zero(xs, ys):
    assert linear_slope(xs, ys) == 0.0
