"""Data models shared across pagetools."""
