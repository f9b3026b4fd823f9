"""
Outbound Adapters
"""
