"""
Adapters

Inbound and outbound adapters implementing the application ports.
"""
