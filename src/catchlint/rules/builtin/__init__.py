"""Builtin rules."""
