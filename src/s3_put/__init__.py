"""Upload local file selections to S3 with per-extension metadata."""

__version__ = "0.1.0"
