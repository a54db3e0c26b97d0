"""Cache backend adapters."""
