"""
faultmap: exception-to-HTTP-response classification for FastAPI services.

Package root. Follows a hexagonal layout (ports & adapters):

Layers:
    - domain: Behavior registry, event chain, configuration, errors, ports.
    - application: The exception handler (classification and dispatch).
    - infrastructure: Contract filter, JSON serializer, response sink adapter.
    - shared: Cross-cutting concerns (error-handling middleware, logging).
"""
