"""Core infrastructure for xcleanup.

Configuration models, XDG paths, logging setup, and the shared
exception hierarchy.
"""
