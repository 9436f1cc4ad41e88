"""
A tree-walking interpreter for Rinha syntax trees.
"""
