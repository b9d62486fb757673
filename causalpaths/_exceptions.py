class GraphError(Exception):
    """Raised when the DAG is structurally invalid."""
    pass


class SpecificationError(ValueError):
    """
    Raised when a model or simulation request is malformed: the wrong number
    of coefficients for the four mediators, a row count that is not a
    positive integer, or conflicting sources of randomness.

    Checked before any random draw, so a failed call never consumes from the
    generator.
    """
    pass
