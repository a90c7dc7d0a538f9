"""
Field location, substitution, composition and package access.
"""
