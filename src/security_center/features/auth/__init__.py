"""Auth feature: identity provider adapters, identity mapping and login flows."""
