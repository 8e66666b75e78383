"""Output formatting for sekret."""
