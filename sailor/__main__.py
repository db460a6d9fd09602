"""
Package entry point.

Allows running the application via:

    python -m sailor

This simply forwards execution to sailor.cli.main().
"""

from sailor.cli import main

if __name__ == "__main__":
    main()
