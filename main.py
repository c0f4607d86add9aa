#!/usr/bin/env python3
"""
AssetSweeper - Main entry point.

Usage:
    python main.py [--difficulty {easy,medium,hard}] [--seed N] [--verbose]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from assetsweeper.cli import main


if __name__ == "__main__":
    main()
