"""Domain models for trichoscopy analysis."""
