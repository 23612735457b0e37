"""Exceptions raised for unrecoverable emulator conditions."""


class Chip8Error(Exception):
    """Base class for fatal emulator errors."""


class ProgramTooLargeError(Chip8Error):
    """Program image does not fit in memory after 0x200."""


class RomLoadError(Chip8Error):
    """ROM file could not be read or is empty."""


class StackOverflowError(Chip8Error):
    """More than 16 nested subroutine calls."""


class StackUnderflowError(Chip8Error):
    """Return executed with an empty call stack."""


class MemoryAccessError(Chip8Error):
    """Address computed outside 0x000-0xFFF."""
