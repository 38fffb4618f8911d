"""Build BetterDiscord plugins that depend on Zere's Plugin Library."""

__version__ = "0.3.0"
