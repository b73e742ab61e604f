#!/usr/bin/env python3
"""
repro-tracker: reproduction tracking for breeding animals.

Records litters and offspring per mother, follows each offspring through
weaning and death, and builds named performance reports with cached AI
summaries.

Usage:
    python repro-tracker.py mother add EWE-1 --project path/to/herd/
    python repro-tracker.py report view spring --project path/to/herd/

This file is a thin wrapper around the cli package.
"""

import asyncio
from cli.commands import main

if __name__ == "__main__":
    asyncio.run(main())
