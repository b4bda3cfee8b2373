"""Allow running PomoClock as a module: python -m pomoclock."""

import sys

from .cli import run


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
