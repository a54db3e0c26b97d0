"""Authentication API routers."""
