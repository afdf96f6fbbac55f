"""NutriTrack: nutrition tracking, meal planning and community challenges."""
