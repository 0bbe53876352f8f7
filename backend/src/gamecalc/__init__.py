"""Pokémon catch chance and WoW gear/stat calculators."""
