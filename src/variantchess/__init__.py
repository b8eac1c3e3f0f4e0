"""variantchess - rule engine and match state machine for chess variants."""

__version__ = "0.1.0"
