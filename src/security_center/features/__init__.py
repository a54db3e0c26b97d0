"""Feature modules of the security center."""
