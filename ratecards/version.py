"""Calculator version, stamped on every batch output row."""

VERSION = "2026.10.0"
