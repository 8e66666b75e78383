"""Command implementations registered on the sekret CLI."""
