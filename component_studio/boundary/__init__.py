"""Boundary adapters: session store, cache and generation service."""
