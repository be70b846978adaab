"""Output layer — renders Results and Schemas for humans or machines."""
