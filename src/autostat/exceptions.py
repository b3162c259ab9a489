"""Domain exceptions for ``autostat``.

Two families:

- Structural errors (``SourceUnavailable``, ``ColumnNotFound``) abort a run.
- Statistical precondition errors (``InvalidGroupCardinality``,
  ``InsufficientVariance``) fail only the analysis step that raised them; the
  orchestrator records them and the report shows them.

Numeric edge cases (division by zero, arithmetic on missing operands) are not
exceptions at all: they produce ``NaN``.
"""


class AutostatError(Exception):
    """Base class for all ``autostat`` errors."""


class SourceUnavailable(AutostatError):
    """Raised when a dataset identifier cannot be resolved or read."""


class ColumnNotFound(AutostatError):
    """Raised when a required column is absent (or not numeric where it must be)."""

    def __init__(self, columns, reason: str = "not found"):
        if isinstance(columns, str):
            columns = [columns]
        self.columns = list(columns)
        self.reason = reason
        super().__init__(f"Column(s) {self.columns} {reason}")


class StatisticalPreconditionError(AutostatError):
    """A statistical analysis cannot run on the given data."""


class InvalidGroupCardinality(StatisticalPreconditionError):
    """Raised when a two-sample comparison does not see exactly two groups."""


class InsufficientVariance(StatisticalPreconditionError):
    """Raised when a column is constant and a correlation is undefined."""
