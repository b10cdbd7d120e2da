"""Schema patch tooling for the CodeLab backend database."""

__version__ = "0.1.0"
