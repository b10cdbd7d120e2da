"""Command-line schema patch scripts."""
