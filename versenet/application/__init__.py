"""
Application Layer

Services orchestrating the domain engines, ports, and the container.
"""
