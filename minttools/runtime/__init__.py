"""
The dictionary, the expansion engine, and the Interpreter which ties them together.
"""
