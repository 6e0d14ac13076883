"""Main entry point for running swift-refactor as a module.

This allows users to run the CLI with:
    python -m swift_refactor [command] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
