"""Allow ``python -m jstype``."""

from jstype.main import main

if __name__ == "__main__":
    raise SystemExit(main())
