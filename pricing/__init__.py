"""Cost and selling-price engine for the menu pricing app."""
