"""Allow ``python -m gradetrack``."""

from gradetrack.cli import main

main()
