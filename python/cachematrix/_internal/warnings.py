"""cachematrix warning categories.

These exist so users can filter/suppress cachematrix warnings without
catching all UserWarning.

Keep this module lightweight and dependency-free to avoid import cycles.
"""


class CachedMatrixWarning(UserWarning):
    """Base warning category for all cachematrix user-facing warnings."""


class CachedMatrixConsistencyWarning(CachedMatrixWarning):
    """An injected inverse does not fit the matrix it is cached against."""
