"""Core build logic: configuration, document discovery, and orchestration."""
