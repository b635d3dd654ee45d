"""Runtime settings read from the environment.

Every value has a sensible default so the engine works without any
environment configuration.
"""

from __future__ import annotations

import os
from decimal import Decimal

# Upper bound on generated periods, as a multiple of the scheduled term.
SAFETY_MULTIPLIER = float(os.environ.get("PREPAY_SAFETY_MULTIPLIER", "3"))

# Outstanding balances at or below this amount count as paid off.
BALANCE_EPSILON = Decimal(os.environ.get("PREPAY_BALANCE_EPSILON", "0.01"))

LOG_LEVEL = os.environ.get("PREPAY_LOG_LEVEL", "WARNING").upper()

# Rows shown by the CLI and web views before truncation.
SCHEDULE_PREVIEW_ROWS = int(os.environ.get("PREPAY_SCHEDULE_PREVIEW_ROWS", "120"))
