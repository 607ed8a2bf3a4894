"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (the Hugging Face Inference
API, article web pages, configuration files, the console) by implementing
the interfaces defined in the domain layer.
"""
