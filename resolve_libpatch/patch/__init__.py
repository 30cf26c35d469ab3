"""The patch itself — moving the bundled GLib libraries aside and back.

- ``models``: filesystem-derived patch state and run results
- ``toggler``: the apply, revert and status operations
"""
