"""API Resilience Implementations.

Contains the rate limiter, the retry executor with exponential backoff and
the circuit breaker that guard calls to the upstream summarization API.
Bounded Context: API Resilience
"""
