from typing import Sequence

import numpy as np
import statsmodels.api as sm


def linear_slope(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Return the ordinary least-squares slope of ``ys`` against ``xs``.

    Equivalent to ``sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean) ** 2)``.
    Returns ``0.0`` for fewer than two points or when ``xs`` has no variance.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.size < 2 or x.size != y.size:
        return 0.0
    if np.all(x == x[0]):
        return 0.0
    # Centre x so the intercept column stays well conditioned for calendar years
    X = sm.add_constant(x - x.mean(), has_constant="add")
    model = sm.OLS(y, X).fit()
    return float(model.params[1])
