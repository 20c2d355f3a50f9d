"""Assembler for the kitty24 virtual machine's assembly language."""

__version__ = "0.1.0"