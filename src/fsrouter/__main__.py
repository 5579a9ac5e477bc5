import sys

from fsrouter.interface.cli.app import main

if __name__ == "__main__":
    sys.exit(main())
