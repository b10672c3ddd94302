#!/usr/bin/env python3
"""Thin wrapper: run sandgit CLI. Usage: python main.py <cmd> ... (same as python -m sandgit)."""

import sys

if __name__ == "__main__":
    from sandgit.cli import main
    sys.exit(main())
