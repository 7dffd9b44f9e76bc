"""Services that sit around the cost engine."""
