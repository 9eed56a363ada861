"""Allow running as `python -m relaybridge`."""

import sys

from relaybridge.cli import main

sys.exit(main())
