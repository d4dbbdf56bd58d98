"""Module entrypoint for ``python -m neopick``."""

from .cli import main


if __name__ == "__main__":
    main()
