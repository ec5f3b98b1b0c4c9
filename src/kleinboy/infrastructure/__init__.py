"""Infrastructure layer — markdown pipeline, filesystem, debug dumps.

This layer depends on stdlib, third-party libs (mistune), and domain types.
It must never import from services, commands, or output.
"""
