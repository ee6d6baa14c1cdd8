"""Find files with identical content by hash, report them, and move extra copies to the trash."""

__version__ = "0.1.0"