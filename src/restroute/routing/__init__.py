"""Routing — route table, placeholder syntax, and path parameter binding.

Routes are registered during startup into an append-only table and
matched against the segments of each request path.
"""
