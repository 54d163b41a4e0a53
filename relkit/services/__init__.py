"""Application services.

Services sequence the release components for one command each and return
Result values; the CLI layer turns those into output and exit codes.
"""

from relkit.services.build import BuildService
from relkit.services.formula import FormulaOutput, FormulaService
from relkit.services.version import VersionChange, VersionService

__all__ = [
    "BuildService",
    "FormulaOutput",
    "FormulaService",
    "VersionChange",
    "VersionService",
]
