"""Allow ``python -m localeforge``."""

import sys

from localeforge.cli import main

sys.exit(main())
