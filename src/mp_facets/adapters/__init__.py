"""Adapters – concrete implementations of the search ports."""
