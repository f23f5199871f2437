"""Module entry-point for ``python -m ctraits``."""

from ctraits.cli import run

if __name__ == "__main__":
    run()
