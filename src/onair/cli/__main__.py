#!/usr/bin/env python3
"""
CLI entry point for onair.cli module.

This allows running: python -m onair.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
