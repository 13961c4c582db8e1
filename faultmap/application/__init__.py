"""
Application layer.

Orchestrates classification: configuration pass, aggregate flattening,
default rules and response emission through the domain ports.
"""
