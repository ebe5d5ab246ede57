"""
Protocols and type aliases shared by the core and runtime packages.
"""
