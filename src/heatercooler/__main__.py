"""Allow running as python -m heatercooler."""

from .cli import main

main()
