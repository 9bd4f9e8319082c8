"""Routeurs REST : catalogue (/movies) et fournisseurs externes (/external)."""
