"""Adapters: concrete I/O (web3 node access, contract reads, exporters).

Each adapter implements or feeds a Core contract without the Core knowing
about web3, aiohttp or Jinja2.
"""
