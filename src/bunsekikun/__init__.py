"""Bunsekikun - Japanese sentence analyzer."""

__version__ = "0.1.0"
