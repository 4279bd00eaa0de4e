"""Module entrypoint for ``python -m ujust_picker``."""

from .cli import main


if __name__ == "__main__":
    main()
