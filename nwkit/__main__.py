"""
Entry point for running the nwkit CLI as a module.

Usage: python -m nwkit [command] [options]
"""

from nwkit.cli.parser import main

if __name__ == "__main__":
    main()
