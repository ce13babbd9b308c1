"""Define constants for the reference frames used by the sequencing engine."""

DEFAULT_FRAME = "world"
"""Name of the single fixed world frame in which all target and achieved poses are expressed."""
