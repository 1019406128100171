"""ClipJoint: a menu bar clip keeper for short text snippets."""

__version__ = "1.0.0"
