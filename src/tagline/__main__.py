"""Allow ``python -m tagline``."""

import sys

from tagline.cli import main

sys.exit(main())
