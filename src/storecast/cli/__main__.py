#!/usr/bin/env python3
"""
CLI entry point for storecast.cli module.

This allows running: python -m storecast.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
