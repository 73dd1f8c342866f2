"""Allow ``python -m cargoflow``."""

from cargoflow.cli import main

if __name__ == "__main__":
    main()
