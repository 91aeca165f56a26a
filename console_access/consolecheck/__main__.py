import sys

from consolecheck.cli import main

sys.exit(main())
