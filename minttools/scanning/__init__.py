"""
The lexical layer of the macro language.
"""
