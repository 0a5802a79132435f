"""Guard patrol simulation with loop detection and an obstacle sweep."""
