#!/usr/bin/env python3
"""Top-level wrapper script for verbump.

Allows running directly: python verbump.py [args]
"""

from verbump.cli import main

if __name__ == "__main__":
    main()
