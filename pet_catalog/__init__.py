"""
Package marker for the pet catalog service.
The query-resolution engine lives in `pet_catalog.query`; the HTTP layer lives in `pet_catalog.api`.
"""
