"""
Error kinds raised while assembling and solving a nodal analysis.

Every error is fatal to the current analysis. The command line entry point
catches NodalAnalysisError and turns it into a non-zero exit status.
"""


class NodalAnalysisError(Exception):
    """Base class for every error raised by the analysis core."""


# =============================================================================
# MATRIX ENGINE
# =============================================================================
class MatrixError(NodalAnalysisError):
    pass


class InvalidDimension(MatrixError, ValueError):
    pass


class OutOfBounds(MatrixError, IndexError):
    pass


class DimensionMismatch(MatrixError, ValueError):
    pass


class NotSquare(MatrixError, ValueError):
    pass


class SingularMatrix(MatrixError, ValueError):
    pass


# =============================================================================
# NETLIST PARSER / STAMPER
# =============================================================================
class NetlistError(NodalAnalysisError, ValueError):
    """
    Error in the netlist text. `line` is the 1-based file line number the
    problem was found on, or None when it is not tied to a single line.
    """

    def __init__(self, message, line=None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class ReservedName(NetlistError):
    pass


class InvalidFrequency(NetlistError):
    pass


class MalformedRecord(NetlistError):
    pass


class UnknownSymbol(NetlistError):
    pass


class UnknownNode(NetlistError):
    pass


class UnsupportedInDcMode(NetlistError):
    pass


class NotImplementedComponent(NetlistError, NotImplementedError):
    pass


class BadMultiplier(NetlistError):
    pass


class BadPhasor(NetlistError):
    pass
