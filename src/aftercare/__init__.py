"""Aftercare: recovery companion backend for myomectomy patients.

Serves the aftercare brochure, tracks per-user checklist progress,
keeps a symptom diary, and handles account authentication.
"""

__version__ = "1.0.0"
