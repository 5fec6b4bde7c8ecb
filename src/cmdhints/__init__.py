"""cmdhints - localized hints and ranked completions for slash commands."""

__version__ = "0.1.0"
