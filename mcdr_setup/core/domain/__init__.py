"""
Domain — pure decision logic: versions, candidate selection, state
machine, request validation.  No I/O.
"""
