"""Allow ``python -m ecobot``."""

from ecobot.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
