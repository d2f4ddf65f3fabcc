# This file marks the routers package for API route modules.
# The package groups endpoint modules by entity so each route set can be reviewed on its own.
