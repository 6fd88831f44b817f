"""
tagmigrator - Custom attribute to tag migration.

Converts the legacy custom attribute annotations of a virtualization
management server into tag categories, tags and tag assignments.
"""

__version__ = "1.0.0"
