"""Allow `python -m fourinarow` to start the command-line host."""

import sys

from fourinarow.interfaces.cli import main

sys.exit(main())
