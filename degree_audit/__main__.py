"""Entry point for `python -m degree_audit`."""

import sys

from .cli import main

sys.exit(main())
