"""
Service layer for derivative generation.

This module contains the upload classification and derivative generation
logic, independent of Django request handling. These functions are used by:
- The upload view (derivatives/views.py)
- The CLI management command (management/commands/derive.py)
"""
