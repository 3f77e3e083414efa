#!/usr/bin/env python3
"""
STARFALL Launcher
==================
Run this script to start the game.
"""

from starfall.main import main

if __name__ == "__main__":
    main()
