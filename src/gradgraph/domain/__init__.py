"""
Backend-agnostic interfaces and errors for gradgraph.
"""
