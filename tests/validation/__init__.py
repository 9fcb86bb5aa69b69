"""Validation test suite for EAD output.

These tests check that exported finding aids are well-formed and keep the
element order EAD 2002 requires, whatever the record content looks like.
"""
