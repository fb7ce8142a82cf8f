"""
Category filter for content-management sites.

Renders taxonomy-term buttons and serves server-rendered HTML fragments of
the posts matching the selected term, cached in a shared transient store.
"""

__version__ = '1.0.0'
