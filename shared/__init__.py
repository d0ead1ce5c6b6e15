"""
Shared Kernel

Value objects and API plumbing shared by every QuickCourt domain app.
"""
