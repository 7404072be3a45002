"""
brainslots: sign-up schedule for the Tuesday/Thursday Brain Trust meetings.
"""
