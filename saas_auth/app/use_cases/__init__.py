"""
Use Cases

Organized into domain folders:
- auth/: Registration, sign-in, tokens and mailed codes
- teams/: Teams and the invitation lifecycle
- admin/: User administration

Import from subdirectories.
"""
