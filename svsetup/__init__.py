"""
ServerSetup - provisions Paper-family Minecraft server directories.

This package resolves server jars from the PaperMC, Purpur and
AdvancedSlimePaper backends, discovers plugins on Hangar and Modrinth,
and keeps the server directory consistent across repeated runs.
"""

__version__ = "1.1.0"
