# This file marks the routers package for API route modules.
# It exists so import paths stay clear when registering route groups.
# The package groups endpoint modules by website resource.
# Keeping this module explicit helps tooling discover API code correctly.
