# Directly left-recursive start symbol.
GRAMMAR = """
E -> E plus num
   | num ;
"""
