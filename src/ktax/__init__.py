"""K-Tax personal income tax calculator."""
