"""Fixed-size dense matrices of floats for small estimation problems."""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Real
from typing import Optional, Union

Number = Union[int, float]


class SingularMatrixError(ArithmeticError):
    """Raised when Gauss-Jordan elimination meets a zero pivot."""


def _flatten(data: Iterable) -> list[float]:
    values: list[float] = []
    for item in data:
        if isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
            values.extend(float(v) for v in item)
        else:
            values.append(float(item))
    return values


def _is_scalar(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class Matrix:
    """A rows x cols matrix stored row-major.

    Elements are read and written with ``m[i, j]``; ``m[i]`` gives row ``i``
    as a tuple, so ``m[i][j]`` also reads an element.
    """

    __slots__ = ("_rows", "_cols", "_data")

    def __init__(self, rows: int, cols: int, data: Optional[Iterable] = None) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"matrix dimensions must be positive, got {rows}x{cols}")
        size = rows * cols
        values = [0.0] * size if data is None else _flatten(data)
        if len(values) != size:
            raise ValueError(f"a {rows}x{cols} matrix needs {size} values, got {len(values)}")
        self._rows = rows
        self._cols = cols
        self._data = values

    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"index ({row}, {col}) out of range for {self._rows}x{self._cols} matrix")
        return row * self._cols + col

    def _row_slice(self, row: int) -> slice:
        if not 0 <= row < self._rows:
            raise IndexError(f"row {row} out of range for {self._rows}x{self._cols} matrix")
        start = row * self._cols
        return slice(start, start + self._cols)

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = index
            return self._data[self._offset(row, col)]
        if isinstance(index, int):
            return tuple(self._data[self._row_slice(index)])
        raise TypeError("matrix index must be an int or a (row, col) pair")

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            row, col = index
            self._data[self._offset(row, col)] = float(value)
            return
        if isinstance(index, int):
            values = [float(v) for v in value]
            if len(values) != self._cols:
                raise ValueError(f"row needs {self._cols} values, got {len(values)}")
            self._data[self._row_slice(index)] = values
            return
        raise TypeError("matrix index must be an int or a (row, col) pair")

    def _same_shape(self, other: "Matrix") -> None:
        if (self._rows, self._cols) != (other._rows, other._cols):
            raise ValueError(
                f"shape mismatch: {self._rows}x{self._cols} and {other._rows}x{other._cols}"
            )

    def _scaled(self, factor: float) -> "Matrix":
        return Matrix(self._rows, self._cols, [v * factor for v in self._data])

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other)
        return Matrix(self._rows, self._cols, [a + b for a, b in zip(self._data, other._data)])

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._same_shape(other)
        return Matrix(self._rows, self._cols, [a - b for a, b in zip(self._data, other._data)])

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.__matmul__(other)
        if _is_scalar(other):
            return self._scaled(float(other))
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._scaled(float(other))
        return NotImplemented

    def __truediv__(self, value):
        if not _is_scalar(value):
            return NotImplemented
        return self._scaled(1.0 / float(value))

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise ValueError(
                f"cannot multiply {self._rows}x{self._cols} by {other._rows}x{other._cols}"
            )
        columns = [other._data[j :: other._cols] for j in range(other._cols)]
        result = [
            sum(a * b for a, b in zip(self._data[self._row_slice(i)], column))
            for i in range(self._rows)
            for column in columns
        ]
        return Matrix(self._rows, other._cols, result)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self._rows, self._cols) == (other._rows, other._cols) and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = [list(self[i]) for i in range(self._rows)]
        return f"Matrix({self._rows}, {self._cols}, {rows})"

    def block(self, start_row: int, start_col: int, rows: int, cols: int) -> "Matrix":
        """Return the rows x cols sub-matrix whose top-left corner is (start_row, start_col)."""
        if (
            start_row < 0
            or start_col < 0
            or start_row + rows > self._rows
            or start_col + cols > self._cols
        ):
            raise IndexError(
                f"block {rows}x{cols} at ({start_row}, {start_col}) exceeds "
                f"{self._rows}x{self._cols} matrix"
            )
        values = []
        for r in range(start_row, start_row + rows):
            base = r * self._cols + start_col
            values.extend(self._data[base : base + cols])
        return Matrix(rows, cols, values)

    def row(self, index: int) -> "Matrix":
        """Return row ``index`` as a 1 x cols matrix."""
        return self.block(index, 0, 1, self._cols)

    def col(self, index: int) -> "Matrix":
        """Return column ``index`` as a rows x 1 matrix."""
        return self.block(0, index, self._rows, 1)

    def trans(self) -> "Matrix":
        """Return the transpose."""
        values = [self._data[i * self._cols + j] for j in range(self._cols) for i in range(self._rows)]
        return Matrix(self._cols, self._rows, values)

    def trace(self) -> float:
        """Sum of the main diagonal."""
        return sum(self._data[i * self._cols + i] for i in range(min(self._rows, self._cols)))

    def norm(self) -> float:
        """Square root of the first element of trans(self) @ self; the length of a column vector."""
        return math.sqrt((self.trans() @ self)[0, 0])

    def inv(self) -> "Matrix":
        """Return the inverse by Gauss-Jordan elimination without row exchanges.

        A non-square matrix gives a cols x rows zero matrix. A zero pivot
        raises SingularMatrixError.
        """
        if self._rows != self._cols:
            return Matrix.zeros(self._cols, self._rows)
        n = self._rows
        work = [list(self[i]) for i in range(n)]
        result = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
        for k in range(n):
            pivot = work[k][k]
            if pivot == 0.0:
                raise SingularMatrixError(f"zero pivot in column {k}")
            work[k] = [v / pivot for v in work[k]]
            result[k] = [v / pivot for v in result[k]]
            for i in range(n):
                if i == k:
                    continue
                factor = work[i][k]
                work[i] = [a - factor * b for a, b in zip(work[i], work[k])]
                result[i] = [a - factor * b for a, b in zip(result[i], result[k])]
        return Matrix(n, n, result)

    @classmethod
    def zeros(cls, rows: int, cols: Optional[int] = None) -> "Matrix":
        """A matrix of zeros."""
        return cls(rows, rows if cols is None else cols)

    @classmethod
    def ones(cls, rows: int, cols: Optional[int] = None) -> "Matrix":
        """A matrix of ones."""
        cols = rows if cols is None else cols
        return cls(rows, cols, [1.0] * (rows * cols))

    @classmethod
    def eye(cls, rows: int, cols: Optional[int] = None) -> "Matrix":
        """A matrix with ones on the main diagonal and zeros elsewhere."""
        result = cls.zeros(rows, cols)
        for i in range(min(result._rows, result._cols)):
            result[i, i] = 1.0
        return result

    @classmethod
    def diag(cls, vec, cols: Optional[int] = None) -> "Matrix":
        """A matrix with the entries of a column vector (or sequence) on its diagonal."""
        if isinstance(vec, Matrix):
            if vec._cols != 1:
                raise ValueError("diag needs a column vector")
            entries = list(vec._data)
        else:
            entries = [float(v) for v in vec]
        rows = len(entries)
        result = cls.zeros(rows, cols)
        for i in range(min(result._rows, result._cols)):
            result[i, i] = entries[i]
        return result