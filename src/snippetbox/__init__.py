"""Snippet sharing service: snippet/user persistence, validation and a thin JSON API."""
