"""Process startup instant, captured before the rest of the package loads."""
from datetime import datetime, timezone

STARTUP_TIME = datetime.now(timezone.utc)
