"""Keyboard event handling."""
