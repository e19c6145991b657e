"""Shared helpers: unit conversion, colours, escaping and package access."""
