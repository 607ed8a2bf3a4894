"""Main entry point when executing aisummarizer as a package.

This allows running the package using python -m aisummarizer.
"""

from aisummarizer.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
