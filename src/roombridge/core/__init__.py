"""Core relay machinery for roombridge."""
