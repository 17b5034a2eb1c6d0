"""Core gameplay primitives (geometry, the moving block, slicing, falling pieces, events).

Kept free of FastAPI concerns so it can be reused by API routes, CLI, and tests.
"""
