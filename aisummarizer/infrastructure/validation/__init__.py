"""Content Validation Implementations.

Checks text length limits, URL format and URL reachability before any
upstream work is done.
"""
