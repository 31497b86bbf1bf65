import sys

from agentrules.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
