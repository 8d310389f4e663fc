"""Desktop simulator (pygame) for Dragon Runner."""
