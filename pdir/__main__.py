"""Module entrypoint for ``python -m pdir``.

All argument parsing and listing happen in ``pdir.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
