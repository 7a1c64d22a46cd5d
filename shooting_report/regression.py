"""Least-squares fit of matched incidents against total incidents per category."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import numpy as np
from scipy import stats

from .aggregate import SummaryTable

logger = logging.getLogger(__name__)


class InsufficientDataError(ValueError):
    """Raised when a summary table cannot support a regression fit."""


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r_value: float
    p_value: float
    stderr: float
    intercept_stderr: float
    n_observations: int

    @property
    def r_squared(self) -> float:
        return self.r_value**2

    def predict(self, x):
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    def as_dict(self) -> Dict[str, float]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_value": self.r_value,
            "r_squared": self.r_squared,
            "p_value": self.p_value,
            "stderr": self.stderr,
            "intercept_stderr": self.intercept_stderr,
            "n_observations": self.n_observations,
        }


def fit_summary_regression(table: SummaryTable) -> RegressionResult:
    """Fit ``matched_count ~ intercept + slope * total_count`` across categories."""
    if len(table) < 2:
        raise InsufficientDataError(
            f"Regression needs at least two categories, got {len(table)}"
        )

    pairs = np.asarray(table.as_pairs(), dtype=float)
    x, y = pairs[:, 0], pairs[:, 1]
    if np.all(x == x[0]):
        raise InsufficientDataError("Regression needs at least two distinct total counts")

    fit = stats.linregress(x, y)
    result = RegressionResult(
        slope=float(fit.slope),
        intercept=float(fit.intercept),
        r_value=float(fit.rvalue),
        p_value=float(fit.pvalue),
        stderr=float(fit.stderr),
        intercept_stderr=float(fit.intercept_stderr),
        n_observations=len(table),
    )
    logger.debug("Regression fit: %s", result.as_dict())
    return result


__all__ = ["InsufficientDataError", "RegressionResult", "fit_summary_regression"]
