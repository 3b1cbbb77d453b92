"""blkcopy: block-oriented byte copier with streaming text transforms."""

__version__ = "0.1.0"
