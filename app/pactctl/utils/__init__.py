"""Utility modules for pactctl."""
