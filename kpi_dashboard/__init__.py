"""
Core package for the KPI dashboard application.

Submodules provide configuration, data loading, the view pipeline, and user
interface rendering helpers that are orchestrated by the top-level `app.py`.
"""
