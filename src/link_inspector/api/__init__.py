"""HTTP surface for the analyze and group contracts."""
