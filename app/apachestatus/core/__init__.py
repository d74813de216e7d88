"""Pure parsing and evaluation pipeline of the status probe."""
