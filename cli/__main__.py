"""
Entry point for running repro-tracker as a module.

Usage:
    python -m cli mother add EWE-1 --project path/to/herd/
    python -m cli litter record EWE-1 --born 2024-03-01 --size 2 --project path/to/herd/
    python -m cli report generate EWE-1 --start 2024-01-01 --end 2024-12-31 --name spring
    python -m cli summary get spring --model haiku
"""

import asyncio
from .commands import main


def run():
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
