"""Translation core: neutral style tree <-> generic attributed node tree.

Every function here is pure: configuration is passed per call and no
module-level state is mutated, so translations may run concurrently.
"""
