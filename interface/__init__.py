"""
Interface package: text front ends for the Tic-Tac-Toe engine.

Modules:
    console: Line protocol over stdin/stdout for playing in a terminal.
             Run it with: python -m interface.console
"""
