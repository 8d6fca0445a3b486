"""
Admin dashboard routers.

Every router in this package requires the admin bearer key.
"""
