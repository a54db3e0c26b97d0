"""Cache entities."""
