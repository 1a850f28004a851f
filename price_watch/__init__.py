"""Lego Price Watch: tracks the lowest catalog price seen for watched sets."""
