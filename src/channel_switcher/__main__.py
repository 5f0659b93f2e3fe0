"""Allow ``python -m channel_switcher``."""

import sys

from channel_switcher.app import main

sys.exit(main())
