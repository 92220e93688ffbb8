"""Core: configuration, domain models, interfaces and services.

The Core never performs I/O itself; it depends on the `RegistryReader`
abstraction implemented in `adapters`.
"""
