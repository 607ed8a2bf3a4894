"""Hugging Face Inference API client.

Request building, response classification and the resilient client that
composes them with the rate limiter, retry executor and circuit breaker.
"""
