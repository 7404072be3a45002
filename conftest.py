"""
Lets pytest import brainslots from a plain checkout (no install needed).
"""
