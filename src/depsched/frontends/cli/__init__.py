"""Command line interface for depsched."""
