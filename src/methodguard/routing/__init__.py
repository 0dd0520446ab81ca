"""Routing — exact-path route table for the host app.

Routes are registered during setup, extended by plugins, and frozen
before the first request.
"""
