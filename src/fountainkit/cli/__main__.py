"""Allow ``python -m fountainkit.cli``."""

from fountainkit.cli.main import main

if __name__ == "__main__":
    main()
