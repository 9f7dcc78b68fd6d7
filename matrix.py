"""
Dense two-dimensional matrix over an arbitrary scalar type.

The scalar type only has to support +, -, *, /, == and construction from the
literals 0 and 1. Plain floats and both complex_numbers forms qualify, which
is what lets the same engine serve the DC (conductance) and AC (admittance)
solvers.

Determinants are computed by recursive cofactor expansion rather than
elimination: no pivoting or magnitude ordering is needed, so complex scalars
work unchanged. The cost is O(n!), which limits the engine to the small
matrices produced by hand-written netlists.
"""
import copy
import logging
import numbers

import numpy as np

from errors import InvalidDimension, OutOfBounds, DimensionMismatch, NotSquare, SingularMatrix

logger = logging.getLogger(__name__)


def _storage_dtype(scalar):
    # Reals live in a float64 buffer so division by zero yields inf/nan
    return np.float64 if scalar is float else object


class Matrix:
    """
    rows x cols matrix of `scalar` values, stored row-major in a flat numpy
    buffer (index = row * cols + col).

    The shape is fixed at construction. Every instance owns its buffer;
    copies and the results of every operation are independent matrices.
    """

    __hash__ = None
    __array_ufunc__ = None

    def __init__(self, rows, cols, scalar=float):
        """
        Create a rows x cols matrix with every element set to scalar(0).

        Raises:
            InvalidDimension: if rows or cols is below 1.
        """
        if rows < 1 or cols < 1:
            raise InvalidDimension(f"Cols/Rows of a matrix must be above 0, got ({rows},{cols})")

        self._rows = int(rows)
        self._cols = int(cols)
        self._scalar = scalar
        self._data = np.empty(self._rows * self._cols, dtype=_storage_dtype(scalar))
        for k in range(self._data.size):
            self._data[k] = scalar(0)

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================
    @classmethod
    def from_rows(cls, mat_data, scalar=None):
        """
        Build a matrix from a list of equal-length rows.

        If `scalar` is not given it is float when every value is real,
        otherwise the type of the first non-real value. Real values in a
        complex matrix are converted with scalar(value).

        Raises:
            InvalidDimension: if there are no rows, a row is empty, or the
                rows differ in length.
        """
        mat_data = [list(row) for row in mat_data]
        if len(mat_data) == 0:
            raise InvalidDimension("Cols/Rows of a matrix must be above 0")

        col_len = len(mat_data[0])
        for row in mat_data:
            if len(row) == 0:
                raise InvalidDimension("Cols/Rows of a matrix must be above 0")
            if len(row) != col_len:
                raise InvalidDimension("Columns must all be of the same length")

        if scalar is None:
            scalar = float
            for row in mat_data:
                non_real = [val for val in row if not isinstance(val, numbers.Real)]
                if non_real:
                    scalar = type(non_real[0])
                    break

        mat = cls(len(mat_data), col_len, scalar)
        for i, row in enumerate(mat_data):
            for j, val in enumerate(row):
                mat.set(i, j, val)
        return mat

    @classmethod
    def identity(cls, length, scalar=float):
        """length x length matrix with scalar(1) on the diagonal, scalar(0) elsewhere."""
        ident = cls(length, length, scalar)
        for i in range(length):
            ident.set(i, i, scalar(1))
        return ident

    def copy(self):
        out = Matrix(self._rows, self._cols, self._scalar)
        if self._data.dtype == object:
            out._data[:] = [copy.copy(val) for val in self._data]
        else:
            out._data[:] = self._data
        return out

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    # =========================================================================
    # ACCESS
    # =========================================================================
    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return self._rows, self._cols

    @property
    def scalar(self):
        return self._scalar

    def get(self, row, col):
        return self._data[self._trans_coord(row, col)]

    def set(self, row, col, val):
        if self._scalar is not float and isinstance(val, numbers.Real):
            val = self._scalar(val)
        self._data[self._trans_coord(row, col)] = val

    def __getitem__(self, index):
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index, val):
        row, col = index
        self.set(row, col, val)

    def row(self, row):
        if not 0 <= row < self._rows:
            raise OutOfBounds(self._gen_coord_err_string(row, 0))
        start = row * self._cols
        return list(self._data[start:start + self._cols])

    def __iter__(self):
        for i in range(self._rows):
            yield self.row(i)

    def to_numpy(self):
        """Copy of the matrix as a 2D float or complex ndarray."""
        if self._scalar is float:
            return self._data.reshape(self._rows, self._cols).copy()
        return np.array([complex(val) for val in self._data], dtype=complex).reshape(self._rows, self._cols)

    # =========================================================================
    # ELEMENTWISE / SCALAR ARITHMETIC
    # =========================================================================
    def _check_same_dims(self, mat, operation):
        if not isinstance(mat, Matrix):
            raise TypeError(f"Matrix {operation} requires a Matrix operand, got {type(mat).__name__}")
        if mat.shape != self.shape:
            raise DimensionMismatch(
                f"Matrix {operation} requires matrices of same dimensions, "
                f"got {self.shape} and {mat.shape}"
            )

    def _elementwise(self, mat, op):
        out = Matrix(self._rows, self._cols, self._scalar)
        for k in range(self._data.size):
            out._data[k] = op(self._data[k], mat._data[k])
        return out

    def _map(self, op):
        out = Matrix(self._rows, self._cols, self._scalar)
        for k in range(self._data.size):
            out._data[k] = op(self._data[k])
        return out

    def __add__(self, mat):
        self._check_same_dims(mat, "addition")
        return self._elementwise(mat, lambda a, b: a + b)

    def __sub__(self, mat):
        self._check_same_dims(mat, "subtraction")
        return self._elementwise(mat, lambda a, b: a - b)

    def __mul__(self, other):
        """Elementwise product with a Matrix, or multiply every element by a scalar."""
        if isinstance(other, Matrix):
            self._check_same_dims(other, "elementwise product")
            return self._elementwise(other, lambda a, b: a * b)
        return self._map(lambda a: a * other)

    def __rmul__(self, other):
        return self._map(lambda a: other * a)

    def __truediv__(self, num):
        # Division by a zero scalar is left to the scalar type
        with np.errstate(divide='ignore', invalid='ignore'):
            return self._map(lambda a: a / num)

    def reciprocal(self):
        with np.errstate(divide='ignore', invalid='ignore'):
            return self._map(lambda a: 1 / a)

    # =========================================================================
    # MATRIX PRODUCT
    # =========================================================================
    def __matmul__(self, mat):
        """
        Standard matrix product (m,p) @ (p,n) -> (m,n).

        Raises:
            DimensionMismatch: if the left column count differs from the
                right row count.
        """
        if not isinstance(mat, Matrix):
            return NotImplemented
        if self._cols != mat.rows:
            raise DimensionMismatch(
                f"Matrix product requires matrices of the dimensions (m,p) @ (p,n), "
                f"got {self.shape} @ {mat.shape}"
            )

        out = Matrix(self._rows, mat.cols, self._scalar)
        for i in range(out.rows):
            for j in range(out.cols):
                total = self._scalar(0)
                for idx in range(self._cols):
                    total = total + self.get(i, idx) * mat.get(idx, j)
                out.set(i, j, total)
        return out

    # =========================================================================
    # COMPARISON
    # =========================================================================
    def __eq__(self, mat):
        """Exact elementwise equality; matrices of different shape are unequal."""
        if not isinstance(mat, Matrix):
            return NotImplemented
        if mat.shape != self.shape:
            return False

        for k in range(self._data.size):
            if self._data[k] != mat._data[k]:
                logger.debug(
                    "Matrix mismatch at (%d,%d): %s != %s",
                    k // self._cols, k % self._cols, self._data[k], mat._data[k],
                )
                return False
        return True

    def __ne__(self, mat):
        result = self.__eq__(mat)
        if result is NotImplemented:
            return result
        return not result

    # =========================================================================
    # LINEAR ALGEBRA
    # =========================================================================
    def transpose(self):
        transpose_mat = Matrix(self._cols, self._rows, self._scalar)
        for i in range(self._rows):
            for j in range(self._cols):
                transpose_mat.set(j, i, self.get(i, j))
        return transpose_mat

    def create_sub_matrix(self, row, col):
        """
        Copy of the matrix with `row` and `col` removed.

        Only meaningful when both dimensions are at least 2; a 1-wide matrix
        has no sub matrix and raises InvalidDimension.
        """
        self._trans_coord(row, col)
        out_mat = Matrix(self._rows - 1, self._cols - 1, self._scalar)

        out_i = 0
        for i in range(self._rows):
            if i == row:
                continue
            out_j = 0
            for j in range(self._cols):
                if j == col:
                    continue
                out_mat.set(out_i, out_j, self.get(i, j))
                out_j += 1
            out_i += 1

        return out_mat

    def minor(self, i, j):
        return self.create_sub_matrix(i, j).determinant()

    def cofactor(self, i, j):
        return self.minor(i, j) * (-1) ** (i + j)

    def determinant(self):
        """
        Determinant by cofactor expansion along the row with the most zeros.

        Zero elements are skipped, since their term would contribute nothing
        but still cost a full recursive minor.

        Raises:
            NotSquare: if rows != cols.
        """
        if self._rows != self._cols:
            raise NotSquare(f"Matrix must be square to have a determinant, got {self.shape}")

        if self._cols == 1:
            return self.get(0, 0)
        if self._cols == 2:
            return self.get(0, 0) * self.get(1, 1) - self.get(1, 0) * self.get(0, 1)

        zero = self._scalar(0)
        working_row = self._find_zeros_row()

        det = self._scalar(0)
        for j in range(self._cols):
            val = self.get(working_row, j)
            if val == zero:
                continue
            det = det + val * self.cofactor(working_row, j)

        return det

    def adjoint(self):
        """Transposed matrix of cofactors."""
        if self._rows != self._cols:
            raise NotSquare(f"Matrix must be square to have an adjoint, got {self.shape}")

        # The only cofactor of a 1x1 matrix is the empty determinant, 1
        if self._rows == 1:
            return Matrix.identity(1, self._scalar)

        out_mat = Matrix(self._rows, self._cols, self._scalar)
        for i in range(self._rows):
            for j in range(self._cols):
                out_mat.set(i, j, self.cofactor(i, j))

        return out_mat.transpose()

    def inverse(self):
        """
        Raises:
            NotSquare: if rows != cols.
            SingularMatrix: if the determinant is zero.
        """
        det = self.determinant()
        if det == self._scalar(0):
            raise SingularMatrix("Matrix determinant is zero, no inverse exists")

        logger.debug("Inverting %dx%d matrix, determinant %s", self._rows, self._cols, det)
        return self.adjoint() / det

    # =========================================================================
    # HELPERS
    # =========================================================================
    def _trans_coord(self, row, col):
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise OutOfBounds(self._gen_coord_err_string(row, col))
        return row * self._cols + col

    def _find_zeros_row(self):
        """Row with the most zero elements; ties go to the lowest index."""
        zero = self._scalar(0)
        highest_zeros_count = 0
        zeros_row = 0

        for i in range(self._rows):
            zero_count = sum(1 for val in self.row(i) if val == zero)
            if zero_count > highest_zeros_count:
                highest_zeros_count = zero_count
                zeros_row = i

        return zeros_row

    def _gen_coord_err_string(self, row, col):
        return (
            f"Bad coordinate, ({row},{col}) is not within the bounds of "
            f"({self._rows - 1},{self._cols - 1})"
        )

    def __repr__(self):
        return f"Matrix({self._rows}x{self._cols}, {self._scalar.__name__})"

    def __str__(self):
        return "\n".join(", ".join(str(val) for val in row) for row in self)
