"""Version 2 API routers: criteria based search."""
