"""Clients for services the security center depends on."""
