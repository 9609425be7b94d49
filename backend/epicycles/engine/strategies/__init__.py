"""Built-in analyzer strategies. Importing this package registers them."""

from epicycles.engine.strategies import direct, fft

__all__ = ["direct", "fft"]
