"""Find complete RAR sets listed by SFV files and extract them with unrar."""

__version__ = "0.1.0"