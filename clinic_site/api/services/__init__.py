# This file marks the services package for entity data access.
# It exists so each website resource keeps its SQL in one module.
# Services are constructed once in dependency factories and shared by routers.
# Keeping this module explicit helps tooling discover API code correctly.
