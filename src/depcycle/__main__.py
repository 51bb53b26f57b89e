"""Entry point for ``python -m depcycle``."""

from .cli import main

main()
