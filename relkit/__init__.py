"""Release tooling for a Cargo package: versions, build numbers, formulae."""

__version__ = "0.3.0"
