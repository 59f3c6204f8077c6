"""Shared primitives for the ferris-lab programs.

Keep this package free of program-specific imports; the programs under
`projects/` depend on it, never the other way around.
"""
