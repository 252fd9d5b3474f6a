"""
HTTP glue: request/response schemas and middleware.
"""
