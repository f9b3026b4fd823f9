"""
Domain Layer

Graph model, score records and the analytics engines. No I/O.
"""
