#!/usr/bin/env python3
"""
Main entry point for the lineirc client
"""

import sys

from lineirc.app import cli

if __name__ == "__main__":
    sys.exit(cli())
