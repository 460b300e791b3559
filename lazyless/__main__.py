"""Module entrypoint for ``python -m lazyless``."""

from .cli import main


if __name__ == "__main__":
    main()
