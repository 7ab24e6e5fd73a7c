"""Shared type aliases for transition functions, hooks and transition data."""
