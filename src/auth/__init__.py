"""
Authentication module for the care-notes system.

This module provides authentication and authorization functionality including:
- Doctor and patient signup
- Unified login for both roles
- Google sign-in
- JWT token guards for doctor, patient and any-user routes
"""
