"""Allow ``python -m gqllinter``."""

from gqllinter.cli import main

if __name__ == "__main__":
    main()
