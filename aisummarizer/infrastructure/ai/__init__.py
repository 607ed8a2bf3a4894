"""AI Model Implementations.

Contains clients/adapters for hosted summarization providers, each
implementing the `ContentSummarizer` interface from the domain layer.
"""
