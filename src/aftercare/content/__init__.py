"""Static brochure content."""
