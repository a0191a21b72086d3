# Balanced a/b pairs followed by c.  A has an empty alternative.
GRAMMAR = """
S -> A c ;
A -> a A b
   | ;
"""
