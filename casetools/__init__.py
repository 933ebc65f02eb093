"""Case notification dispatch service."""
