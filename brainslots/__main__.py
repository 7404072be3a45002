"""
Package entry point.

Allows running the application via:

    python -m brainslots

This simply forwards execution to brainslots.cli.main().
"""

from brainslots.cli import main

if __name__ == "__main__":
    main()
