"""
SERENE Infrastructure Layer

Observability integrations. The engine performs no storage or
network I/O; persistence and reply generation belong to the host.
"""
