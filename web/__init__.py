"""Rug catalog browser: derived views and the JSON API serving them."""
