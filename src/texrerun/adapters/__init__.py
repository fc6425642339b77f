"""Integrations with external programs."""
