"""Root conftest — shared test configuration."""

import os

# Ensure a developer .env does not change message language under test
os.environ.setdefault("DATAFEED_GUARD_DEFAULT_LOCALE", "en")
os.environ.setdefault("DATAFEED_GUARD_LOG_FORMAT", "text")
