"""Module entrypoint for ``python -m zipnav``.

All argument parsing and setup happen in ``zipnav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
