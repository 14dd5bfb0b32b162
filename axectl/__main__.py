"""Allow ``python -m axectl``."""

from axectl.cli import main

if __name__ == "__main__":
    main()
