"""McBays website contact form relay."""
