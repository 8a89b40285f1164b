"""
Entry point for running coolclis as a module.

Usage: python -m coolclis [command] [options]
"""

from coolclis.cli import main

if __name__ == "__main__":
    main()
