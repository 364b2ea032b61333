"""Application services (use cases) orchestrating repositories via Units of Work."""
