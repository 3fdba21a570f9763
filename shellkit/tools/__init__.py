"""Wrappers around external tools and OS facilities."""
