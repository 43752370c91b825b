"""pactctl - declarative dotfiles and developer environment manifest."""

__version__ = "0.4.0"
