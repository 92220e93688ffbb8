"""Orchestration services built on the Core interfaces."""
