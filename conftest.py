"""Global pytest configuration."""

import os

# Skip the simulated login delay for tests before settings are cached
os.environ.setdefault("DOCVAULT_LOGIN_DELAY_SECONDS", "0")
