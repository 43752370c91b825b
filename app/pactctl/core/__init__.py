"""Core engines for pactctl: manifest I/O, sync, diff and merge."""
