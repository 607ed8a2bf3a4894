"""Content Optimization Implementations.

Cleans and bounds input text before it is sent upstream and tidies the
generated summary before it is shown.
Bounded Context: Content Optimization
"""
