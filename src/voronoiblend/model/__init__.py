"""
The MODEL layer contains pure data structures and business logic:
colors, points, the spatial partition and the diagram state.
Only the state store knows about Qt (for its signal).
"""
