"""Platform-wide reports for admins."""
