"""Data models for roombridge."""
