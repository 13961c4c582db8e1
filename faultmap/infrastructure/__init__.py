"""
Infrastructure layer.

Adapters implementing domain ports: JSON serialization with the
exception contract filter, and the buffered HTTP response sink.
"""
