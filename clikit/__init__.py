"""Building blocks for command line applications: arguments, categories, flag specs and input sources."""

__version__ = "0.1.0"
__all__ = ["args", "category", "genflags", "altsrc"]