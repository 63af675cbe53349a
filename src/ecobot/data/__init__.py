"""Packaged default data for :mod:`ecobot`."""
