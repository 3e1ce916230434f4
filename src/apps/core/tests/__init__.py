"""
Core app tests package.

Tests for pagination, error mapping, fan-out and the shared base models.
"""
