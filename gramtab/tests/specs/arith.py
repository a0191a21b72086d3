# Left-recursive expression grammar; SLR(1), but neither LR(0) nor LL(1).
GRAMMAR = """
Start -> E $ ;
E -> E plus T | T ;
T -> T star F | F ;
F -> lparen E rparen | id ;
"""
