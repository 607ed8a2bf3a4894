"""Application services implementing the summarization use cases."""
