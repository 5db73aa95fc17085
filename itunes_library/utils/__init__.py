"""
Helpers for diagnostics and command-line use
"""
