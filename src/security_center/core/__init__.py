"""Core building blocks shared across security center features."""
