"""HTTP layer: routers, request schemas and error translation."""
