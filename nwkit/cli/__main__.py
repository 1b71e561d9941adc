"""
Entry point for running the nwkit CLI as a module.

Usage: python -m nwkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
