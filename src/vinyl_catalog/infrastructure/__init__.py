"""
Infrastructure Layer

Backing stores, the collection repository and the Discogs API adapter.
"""
