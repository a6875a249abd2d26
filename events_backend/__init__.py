"""
Backend package for the DevEvent API.

This package provides a FastAPI application that stores events in MongoDB
and hosts their images on Cloudinary, with in-memory backends for local runs
and tests.
"""
