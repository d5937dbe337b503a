"""
hiit-cli: run high-intensity interval training routines in the terminal.

Routines are JSON files of timed exercises; the engine in core/engine
counts every set and rest down and reports progress to the console.
"""

__version__ = "0.1.0"
