"""
Compiled bodies, and the compiler which makes them out of source text.
"""
