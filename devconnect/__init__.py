"""
DevConnect profile service library: settings, storage, repositories, the
GitHub client and logging. The HTTP layer lives in ``backend.app``.
"""

__version__ = "1.0.0"
