"""
Package entry point.

Allows running the application via:

    python -m cmstimetable

This simply forwards execution to cmstimetable.cli.main().
"""

from cmstimetable.cli import main

if __name__ == "__main__":
    main()
