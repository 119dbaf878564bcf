"""Infrastructure services shared by the grid engines."""
