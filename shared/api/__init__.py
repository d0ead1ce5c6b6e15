"""API plumbing shared across the QuickCourt apps."""
