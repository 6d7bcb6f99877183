"""Geographic data and projection for the destination map."""
