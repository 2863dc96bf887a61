# This file marks the API package for the website backend.
# It exists so routers, services, and schemas share one import root.
# The package layout mirrors the request flow from route to service to SQL.
# Keeping it explicit helps tooling discover API code correctly.
