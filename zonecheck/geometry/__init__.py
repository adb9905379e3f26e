"""Planar polygon geometry for commercial zones."""
