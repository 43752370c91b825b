"""Bundled data files for pactctl."""
