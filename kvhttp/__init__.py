"""
kvhttp: In-Memory Key-Value Store over HTTP

A minimal, thread-safe key-value store exposed through a single JSON
endpoint, served with FastAPI and uvicorn.
"""

__version__ = "1.0.0"
