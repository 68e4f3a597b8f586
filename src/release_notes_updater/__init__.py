"""Release Notes Updater.

A CI step that prepends and/or appends text to the body of an existing
GitHub release, optionally skipping the update when the body already
matches a pattern.
"""

__version__ = "0.1.0"
