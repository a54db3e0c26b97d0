"""Session API routers."""
