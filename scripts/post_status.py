"""Submit or read status records against a running service."""

from __future__ import annotations

import sys

from status_service.client import main


if __name__ == "__main__":
    sys.exit(main())
