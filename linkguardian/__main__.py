"""Allow running as `python -m linkguardian`."""

from .cli import main

raise SystemExit(main())
