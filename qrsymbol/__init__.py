"""QR Code specification tables, Reed-Solomon ECC, input segments and structured append."""

__version__ = "0.1.0"
__all__ = ["spec", "rsecc", "segments", "qrinput", "structured"]