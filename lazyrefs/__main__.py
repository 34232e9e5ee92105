"""Module entrypoint for ``python -m lazyrefs``."""

from .cli import main


if __name__ == "__main__":
    main()
