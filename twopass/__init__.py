"""A two-pass assembler with macro expansion for a 24-bit teaching machine."""

__version__ = "0.1.0"