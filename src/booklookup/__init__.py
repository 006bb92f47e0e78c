# ABOUTME: booklookup resolves book metadata by ISBN or title across several catalog services.
# ABOUTME: Package root; the public lookup API lives in booklookup.metadata.

__version__ = "0.1.0"
