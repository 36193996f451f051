"""
Version 1 of the catalog API.

Breaking changes should be introduced in new version subpackages
(e.g. ``v2``) to preserve backwards compatibility.
"""
