"""gradetrack - student record tracker with grade aggregation."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed gradetrack version."""
    return __version__
