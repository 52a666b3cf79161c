"""Recursive least squares estimator with a forgetting factor."""

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import Optional, Union

from rmcontrol.matrix import Matrix

VectorLike = Union[Matrix, Iterable[float]]


class RLS:
    """Estimates the parameters of a linear model y = x^T * theta online.

    ``delta`` initialises the transfer matrix to ``delta * I`` and
    ``lambda_`` is the forgetting factor.
    """

    def __init__(
        self,
        dim: int,
        delta: float,
        lambda_: float,
        init_params: Optional[VectorLike] = None,
    ) -> None:
        if dim <= 0:
            raise ValueError(f"dimension must be positive, got {dim}")
        if delta <= 0:
            raise ValueError(f"delta must be positive, got {delta}")
        if lambda_ <= 0:
            raise ValueError(f"forgetting factor must be positive, got {lambda_}")
        self.dimension = dim
        self.delta = float(delta)
        self.lambda_ = float(lambda_)
        self.last_update = 0.0
        self.update_count = 0
        self.default_params = (
            Matrix.zeros(dim, 1) if init_params is None else self._column(init_params)
        )
        self._output = 0.0
        self.reset()

    def _column(self, values: VectorLike) -> Matrix:
        if isinstance(values, Matrix):
            if (values.rows(), values.cols()) != (self.dimension, 1):
                raise ValueError(
                    f"expected a {self.dimension}x1 vector, got {values.rows()}x{values.cols()}"
                )
            return values.col(0)
        return Matrix(self.dimension, 1, values)

    @property
    def trans_matrix(self) -> Matrix:
        """A copy of the current transfer (covariance) matrix."""
        return self._trans_matrix.block(0, 0, self.dimension, self.dimension)

    @property
    def gain_vector(self) -> Matrix:
        """A copy of the gain vector from the last update."""
        return self._gain.col(0)

    def reset(self) -> None:
        """Restore the transfer matrix to delta * I and clear gain and parameters."""
        self._trans_matrix = Matrix.eye(self.dimension) * self.delta
        self._gain = Matrix.zeros(self.dimension, 1)
        self._params = Matrix.zeros(self.dimension, 1)

    def update(self, sample: VectorLike, actual_output: float) -> Matrix:
        """Run one update with a new sample and its measured output; return the parameters."""
        x = self._column(sample)
        xt = x.trans()
        p = self._trans_matrix
        lam = self.lambda_

        denominator = 1.0 + (xt @ p @ x)[0, 0] / lam
        self._gain = (p @ x) / denominator / lam
        residual = actual_output - (xt @ self._params)[0, 0]
        self._params = self._params + self._gain * residual
        self._trans_matrix = (p - self._gain @ xt @ p) / lam
        self._output = (xt @ self._params)[0, 0]

        self.update_count += 1
        self.last_update = time.process_time()
        return self.params_vector()

    def set_params_vector(self, params: VectorLike) -> None:
        """Set the current and the default regression parameters."""
        column = self._column(params)
        self._params = column
        self.default_params = column.col(0)

    def params_vector(self) -> Matrix:
        """A copy of the current parameter vector."""
        return self._params.col(0)

    def output(self) -> float:
        """The model output for the last sample with the updated parameters."""
        return self._output