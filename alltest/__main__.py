"""Module entrypoint for ``python -m alltest``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and run setup happen in ``alltest.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
