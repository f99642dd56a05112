"""
Frontend-facing layers: session view state and display text.
"""
