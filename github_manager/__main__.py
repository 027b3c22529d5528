"""Entry point for running as a module: python -m github_manager."""

import sys

from github_manager.cli import main

if __name__ == "__main__":
    sys.exit(main())
