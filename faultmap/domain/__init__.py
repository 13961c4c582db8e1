"""
Domain layer.

Pure classification rules. No framework imports, no IO.
"""
