"""Users app package.

Accounts, roles and the email one-time-code signup flow. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
