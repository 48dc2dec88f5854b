"""Vehicle lookup service: VIN decoding, plate lookup and history."""

__version__ = "0.1.0"
