"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) plus the typed errors and the
  wire text codec.
- The domain knows nothing about HTTP, JSON-RPC or the CLI.
"""
