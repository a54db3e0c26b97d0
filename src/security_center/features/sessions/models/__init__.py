"""Session API models."""
