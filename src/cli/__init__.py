"""Command line layer (typer + rich).

Only rendering and exit codes live here; the aggregation logic is in
`core.services`.
"""
