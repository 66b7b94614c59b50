"""Command-line front end and command handlers."""
