"""Article Extraction Implementations.

Fetches web pages and reduces them to readable article text.
"""
