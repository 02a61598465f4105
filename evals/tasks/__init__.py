"""Eval tasks."""
