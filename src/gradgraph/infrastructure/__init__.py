"""
NumPy-backed implementations: tensor, operations, graph and engine.
"""
