"""Entry point for running gitindex as a module.

This module allows gitindex to be run as a Python module using the -m flag:
    python -m gitindex
"""

from . import cli

if __name__ == "__main__":
    cli._main()
