"""Service layer: business logic behind the routers."""
